"""
Core data models for the supplier data generator.

This module contains the catalog entry model (CSV input) and the transaction
record model (CSV output). Output field aliases are the exact column names
of the consolidated transactions file.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

# ================================
# CATALOG MODELS (CSV INPUT)
# ================================

PRODUCT_ID_COLUMN = "ProductID"
PRICE_COLUMN = "Price"
REQUIRED_CATALOG_COLUMNS = [PRODUCT_ID_COLUMN, PRICE_COLUMN]


class PriceEntry(BaseModel):
    """One parsed row of a supplier price catalog."""

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., min_length=1, description="Supplier product code")
    price: float = Field(..., description="Unit price; NaN when the cell was not numeric")


# ================================
# TRANSACTION MODELS (CSV OUTPUT)
# ================================

TRANSACTION_COLUMNS = [
    "Date",
    "Supplier",
    "Branch",
    "Invoice status",
    "Product",
    "Transaction Type",
    "Units",
    "Value",
    "Currency",
    "External Reference",
    "Interface Date",
    "Primary Key",
    "Agreement ID",
    "Advised Earnings",
    "Order Reference",
    "Delivery Reference",
    "Invoice Reference",
]

INVOICE_STATUS_PAID = "Paid"
TRANSACTION_TYPE_PURCHASE = "Purchase"
CURRENCY_AUD = "AUD"


class TransactionRecord(BaseModel):
    """A single synthesized purchase transaction."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    txn_date: date = Field(..., alias="Date")
    supplier: str = Field(..., alias="Supplier")
    branch: str = Field(..., alias="Branch")
    invoice_status: str = Field(INVOICE_STATUS_PAID, alias="Invoice status")
    product: str = Field(..., alias="Product")
    transaction_type: str = Field(TRANSACTION_TYPE_PURCHASE, alias="Transaction Type")
    units: int = Field(..., ge=1, alias="Units")
    value: float = Field(..., alias="Value")
    currency: str = Field(CURRENCY_AUD, alias="Currency")
    external_reference: str = Field("", alias="External Reference")
    interface_date: str = Field("", alias="Interface Date")
    primary_key: str = Field(..., alias="Primary Key")
    agreement_id: str = Field("", alias="Agreement ID")
    advised_earnings: str = Field("", alias="Advised Earnings")
    order_reference: str = Field("", alias="Order Reference")
    delivery_reference: str = Field("", alias="Delivery Reference")
    invoice_reference: str = Field(..., alias="Invoice Reference")

    def to_row(self) -> dict:
        """Return the record keyed by output column name."""
        return self.model_dump(by_alias=True)
