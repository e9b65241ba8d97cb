"""Display formatting for amounts and dates."""

from datetime import datetime

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥", "INR": "₹"}


def format_currency(amount: float | None, currency: str | None = None) -> str:
    if amount is None:
        return "N/A"
    code = (currency or "USD").upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{amount:,.2f}"
    return f"{amount:,.2f} {code}"


def format_date(value: str | None) -> str:
    """Render an ISO date or timestamp as e.g. 'Jan 15, 2024'."""
    if not value:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%b %d, %Y")
