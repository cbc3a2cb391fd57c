import re
from decimal import Decimal, InvalidOperation
from typing import Optional

MIN_AMOUNT = Decimal("0")
MAX_AMOUNT = Decimal("100")
MIN_RATING = Decimal("0")
MAX_RATING = Decimal("5")

# Commas only group thousands ("1,000"); a decimal comma ("12,5") is ambiguous and rejected.
_NUMBER_PATTERN = re.compile(r"-?\d+(?:,\d+)*(?:\.\d+)?")
_WELL_FORMED_NUMBER = re.compile(r"-?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?")

_YES_WORDS = {"yes", "y", "yeah", "yep", "sure", "ok", "okay", "confirm", "true", "approve"}
_NO_WORDS = {"no", "n", "nope", "nah", "false", "decline"}


def parse_number(text) -> Optional[Decimal]:
    """Returns the first number found in free text, e.g. 'send 50 dollars' -> 50."""
    if text is None:
        return None
    if isinstance(text, (int, float, Decimal)) and not isinstance(text, bool):
        return Decimal(str(text))
    match = _NUMBER_PATTERN.search(str(text))
    if not match:
        return None
    token = match.group(0)
    if not _WELL_FORMED_NUMBER.fullmatch(token):
        return None
    try:
        return Decimal(token.replace(",", ""))
    except InvalidOperation:
        return None


def parse_confirmation(text: Optional[str]) -> Optional[bool]:
    """Recognises a yes/no reply. Returns None when the reply is neither."""
    if not text:
        return None
    words = re.findall(r"[a-z]+", text.lower())
    if not words:
        return None
    if words[0] in _YES_WORDS:
        return True
    if words[0] in _NO_WORDS:
        return False
    return None


def is_valid_amount(value: Optional[Decimal]) -> bool:
    return value is not None and MIN_AMOUNT < value < MAX_AMOUNT


def is_valid_rating(value: Optional[Decimal]) -> bool:
    return value is not None and MIN_RATING <= value <= MAX_RATING
