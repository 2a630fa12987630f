"""
Phone Number Normalization

Supported patterns:
- 10 digits: US/Canada without country code
- 11+ digits starting with 1: US/Canada with country code
- starting with 63: Philippines

Anything else is not dialable. The tagging key is always the bare digits.
"""
import re
from typing import Optional

from leadcaller.domain.models.phone import NormalizedPhone

_NON_DIGITS = re.compile(r"\D")

PHILIPPINES_PREFIX = "63"
NANP_PREFIX = "1"


def digits_only(raw: Optional[str]) -> str:
    """Strip everything but digits. None and empty input give ''."""
    if raw is None:
        return ""
    return _NON_DIGITS.sub("", str(raw).strip())


def to_dialable(digits: str) -> Optional[str]:
    """Map bare digits to E.164, or None if the pattern is unsupported."""
    if digits.startswith(PHILIPPINES_PREFIX):
        return f"+{digits}"
    if len(digits) == 10:
        return f"+{NANP_PREFIX}{digits}"
    if len(digits) >= 11 and digits.startswith(NANP_PREFIX):
        return f"+{digits}"
    return None


def normalize(raw: Optional[str]) -> NormalizedPhone:
    """
    Convert a loosely formatted phone number to its canonical forms.
    
    Never raises; unrecognized input yields dialable=None.
    
    Examples:
        "(555) 123-4567" -> dialable "+15551234567", tagging_key "5551234567"
        "09171234567"    -> dialable None, tagging_key "09171234567"
    """
    digits = digits_only(raw)
    return NormalizedPhone(dialable=to_dialable(digits), tagging_key=digits)
