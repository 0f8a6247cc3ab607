"""
Standardized reference key generation for transaction records.

Reference keys are purely positional: they embed the supplier, the key
purpose, the month, the year and the 1-based record index within the month,
so they are deterministic and unique per (month, index) pair.

Format: {supplier}-{PURPOSE}-{MM}-{YYYY}-{index}

Examples:
    Primary key: SUP1-PRI-01-2024-1
    Invoice reference: SUP1-INV-12-2024-35
"""

PRIMARY_KEY_PURPOSE = "PRI"
INVOICE_REFERENCE_PURPOSE = "INV"


class ReferenceKeyGenerator:
    """
    Formats reference keys for one purpose (e.g. ``PRI`` or ``INV``).

    Attributes:
        purpose: Purpose tag embedded in every key
        month_width: Zero-padded width of the month component
    """

    def __init__(self, purpose: str, month_width: int = 2) -> None:
        """
        Initialize the key generator.

        Args:
            purpose: Purpose tag (e.g. "PRI", "INV")
            month_width: Width the month is padded to (default: 2)

        Raises:
            ValueError: If purpose is empty or month_width is not positive
        """
        if not purpose:
            raise ValueError("Purpose cannot be empty")
        if month_width < 1:
            raise ValueError("month_width must be >= 1")

        self.purpose = purpose
        self.month_width = month_width

    def generate(self, supplier_id: str, month: int, year: int, index: int) -> str:
        """
        Generate a reference key.

        Args:
            supplier_id: Supplier identifier of the run
            month: Calendar month (1-12)
            year: Target year
            index: 1-based record index within the month

        Returns:
            Formatted key string

        Raises:
            ValueError: If index is below 1

        Examples:
            >>> ReferenceKeyGenerator("PRI").generate("SUP1", 1, 2024, 1)
            'SUP1-PRI-01-2024-1'
        """
        if index < 1:
            raise ValueError("index must be >= 1")

        return f"{supplier_id}-{self.purpose}-{month:0{self.month_width}d}-{year}-{index}"


primary_key_generator = ReferenceKeyGenerator(PRIMARY_KEY_PURPOSE)
invoice_reference_generator = ReferenceKeyGenerator(INVOICE_REFERENCE_PURPOSE)
