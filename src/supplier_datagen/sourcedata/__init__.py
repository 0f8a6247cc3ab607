"""
Source data for supplier transaction generation.

Usage:
    from supplier_datagen.sourcedata.branches import BRANCH_CODES
"""

from supplier_datagen.sourcedata.branches import BRANCH_CODES

__all__ = ["BRANCH_CODES"]
