"""
Supplier Transaction Data Generator

Synthesizes a year of purchase transactions for a supplier from an uploaded
product price catalog:
- Price catalog parsing (ProductID, Price)
- Randomized monthly volume bounds
- Consolidated CSV output, served over HTTP or written from the CLI
"""

__version__ = "1.0.0"
__author__ = "Supplier DataGen"
