"""Money helpers and wallet constants shared across the project.


- FEE_RATE is the share of a transfer charged on top of the amount.
- PAGE_SIZE is how many history items one "load more" returns.
- to_money / compute_fee keep every amount a 2-decimal Decimal.
"""

from django.conf import settings
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .errors import InvalidAmount

FEE_RATE = Decimal(str(getattr(settings, "WALLET_FEE_RATE", "0.01")))
PAGE_SIZE = int(getattr(settings, "WALLET_PAGE_SIZE", 3))
DEFAULT_BALANCE = Decimal(str(getattr(settings, "WALLET_DEFAULT_BALANCE", "120000")))
WALLET_USER_ID = getattr(settings, "WALLET_USER_ID", "USER123")
QR_REFRESH_SECONDS = int(getattr(settings, "WALLET_QR_REFRESH_SECONDS", 30))
QR_PREFIX = "WaveWeb"

# Storage keys (kept from the browser version so existing data stays readable)
BALANCE_KEY = "solde"
HISTORY_KEY = "historique"

CENT = Decimal("0.01")
# Largest amount or balance accepted (15 integer digits)
MAX_AMOUNT = Decimal("999999999999999.99")


def to_money(value) -> Decimal:
    """
    Parse a user amount (str, int, float or Decimal) into a 2-decimal Decimal.

    Raises InvalidAmount for blanks, non-numeric text, NaN, infinities and
    anything beyond MAX_AMOUNT.
    Sign is not checked here; callers decide what range is acceptable.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmount()
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            raise InvalidAmount()
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidAmount()
    if not amount.is_finite() or abs(amount) > MAX_AMOUNT:
        raise InvalidAmount()
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmount()


def compute_fee(amount: Decimal, rate: Decimal = FEE_RATE) -> Decimal:
    """
    Transfer fee rounded half-up to the cent, e.g. 1000.00 at 1% -> 10.00
    """
    return (Decimal(amount) * Decimal(rate)).quantize(CENT, rounding=ROUND_HALF_UP)
