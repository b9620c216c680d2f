"""Display helpers for amounts embedded in notes and reports."""


def format_amount(amount: float) -> str:
    """Group thousands and drop trailing zeros: 50000 -> '50,000', 1234.5 -> '1,234.5'."""
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_eur(amount: float) -> str:
    return f"€{format_amount(amount)}"
