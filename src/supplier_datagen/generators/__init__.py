"""
Generators module for supplier transaction data.

This module contains the volume model, the monthly transaction synthesizer
and the pipeline that combines them into a consolidated yearly file.
"""

from .pipeline import GenerationPipeline, GenerationResult, build_filename
from .transaction_generator import TransactionSynthesizer, days_in_month
from .volume_model import MONTH_ABBREVIATIONS, MonthlyVolumeModel, units_max_for

__all__ = [
    "GenerationPipeline",
    "GenerationResult",
    "build_filename",
    "TransactionSynthesizer",
    "days_in_month",
    "MonthlyVolumeModel",
    "MONTH_ABBREVIATIONS",
    "units_max_for",
]
