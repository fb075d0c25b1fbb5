# lapscout/utils/money.py
import re
from typing import Optional, Tuple

CURRENCY_SYMBOLS = ("$", "£", "€", "₹")

_AMOUNT_RE = re.compile(r'(\d[\d,]*)(?:\.(\d{1,2}))?')


def parse_price(price_text: str) -> Optional[float]:
    """
    Convert strings like "$1,299.00", "1,299" or "from $999" to 1299.0 / 999.0.
    Returns None when there is no amount in the text.
    """
    if not price_text:
        return None
    m = _AMOUNT_RE.search(str(price_text))
    if not m:
        return None
    whole = m.group(1).replace(',', '')
    cents = m.group(2) or "0"
    try:
        return float(f"{int(whole)}.{cents}")
    except ValueError:
        return None


def detect_currency(price_text: str, default: str = "$") -> str:
    txt = price_text or ""
    for sym in CURRENCY_SYMBOLS:
        if sym in txt:
            return sym
    if re.search(r'\b(usd|us\$)\b', txt, flags=re.IGNORECASE):
        return "$"
    return default


def parse_price_with_currency(price_text: str) -> Tuple[Optional[float], str]:
    return parse_price(price_text), detect_currency(price_text)


def format_price(amount: float, currency: str = "$") -> str:
    if amount == int(amount):
        return f"{currency}{int(amount):,}"
    return f"{currency}{amount:,.2f}"
