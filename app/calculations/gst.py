"""
GST (Goods and Services Tax) Calculations
"""

from dataclasses import dataclass

# Indian GST slabs offered by the calculator
STANDARD_GST_RATES = (5, 12, 18, 28)


@dataclass
class GSTResult:
    base_amount: float
    gst_amount: float
    total_amount: float


def calculate_gst(amount: float, gst_rate: float, is_inclusive: bool = False) -> GSTResult:
    """
    Split an amount into base price and tax.

    Args:
        amount: Amount to decompose
        gst_rate: GST rate in percent (e.g., 18 for 18%)
        is_inclusive: True if ``amount`` already includes the tax

    Returns:
        GSTResult with base, tax and total amounts
    """
    if amount < 0:
        raise ValueError("amount must not be negative")
    if gst_rate < 0:
        raise ValueError("gst_rate must not be negative")

    if is_inclusive:
        base_amount = amount / (1 + gst_rate / 100)
        return GSTResult(
            base_amount=base_amount,
            gst_amount=amount - base_amount,
            total_amount=amount,
        )

    gst_amount = amount * gst_rate / 100
    return GSTResult(
        base_amount=amount,
        gst_amount=gst_amount,
        total_amount=amount + gst_amount,
    )
