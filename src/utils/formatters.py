from decimal import Decimal, ROUND_HALF_UP
from config.settings import CURRENCY_SYMBOL

TWO_PLACES = Decimal('0.01')

def to_money(amount: Decimal) -> Decimal:
    """Round a full-precision amount to 2 decimals, half up"""
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

def format_currency(amount: Decimal, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format currency amount"""
    return f"{symbol} {amount:,.2f}"

def format_percentage(rate: Decimal) -> str:
    """Format a 0-1 rate as a percentage"""
    return f"{rate * 100:.2f}%"
