"""
Field rules shared by every intake form.

The same table is served to the browser client (see Validation_router), so a
value accepted by the form is accepted by the API and vice versa.
"""
import re
from typing import Optional

MOBILE_PATTERN = r"^[6-9]\d{9}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PINCODE_PATTERN = r"^[1-9][0-9]{5}$"

_MOBILE_RE = re.compile(MOBILE_PATTERN, re.ASCII)
_EMAIL_RE = re.compile(EMAIL_PATTERN)
_PINCODE_RE = re.compile(PINCODE_PATTERN, re.ASCII)
_NON_DIGITS_RE = re.compile(r"\D", re.ASCII)

FULL_NAME_MIN_LENGTH = 2
FULL_NAME_MAX_LENGTH = 100
RTI_QUERY_MIN_LENGTH = 10
RTI_QUERY_MAX_LENGTH = 5000
ADDRESS_MIN_LENGTH = 10
ADDRESS_MAX_LENGTH = 500
SLUG_MAX_LENGTH = 100

MESSAGES = {
    "full_name_length": f"Full name must be between {FULL_NAME_MIN_LENGTH} and {FULL_NAME_MAX_LENGTH} characters",
    "email": "Please provide a valid email",
    "mobile": "Please provide a valid 10-digit mobile number",
    "pincode": "Please provide a valid 6-digit pincode",
    "rti_query_length": f"RTI query must be between {RTI_QUERY_MIN_LENGTH} and {RTI_QUERY_MAX_LENGTH} characters",
    "address_length": f"Address must be between {ADDRESS_MIN_LENGTH} and {ADDRESS_MAX_LENGTH} characters",
    "address_max_length": f"Address must be at most {ADDRESS_MAX_LENGTH} characters",
}


def clean_digits(value: str) -> str:
    return _NON_DIGITS_RE.sub("", value or "")


def is_valid_mobile(value: Optional[str]) -> bool:
    if not value:
        return False
    return bool(_MOBILE_RE.match(clean_digits(value)))


def is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return False
    return bool(_EMAIL_RE.match(value.strip()))


def is_valid_pincode(value: Optional[str]) -> bool:
    if not value:
        return False
    return bool(_PINCODE_RE.match(value.strip()))


def as_text(value) -> Optional[str]:
    """Accept strings and bare numbers (form libraries send both), reject the rest."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise ValueError("Must be a string")


def normalize_text(value: Optional[str]) -> Optional[str]:
    """Trim; blank strings become None."""
    value = as_text(value)
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_email(value: str) -> str:
    return value.strip().lower()


def normalize_mobile(value: str) -> str:
    return clean_digits(value)


# Validators raising ValueError, for use inside pydantic field validators.

def check_full_name(value: Optional[str]) -> str:
    value = normalize_text(value)
    if value is None:
        raise ValueError("Full name is required")
    if not FULL_NAME_MIN_LENGTH <= len(value) <= FULL_NAME_MAX_LENGTH:
        raise ValueError(MESSAGES["full_name_length"])
    return value


def check_email(value: Optional[str]) -> str:
    value = as_text(value)
    if not is_valid_email(value):
        raise ValueError(MESSAGES["email"])
    return normalize_email(value)


def check_mobile(value: Optional[str]) -> str:
    value = as_text(value)
    if not is_valid_mobile(value):
        raise ValueError(MESSAGES["mobile"])
    return normalize_mobile(value)


def check_optional_pincode(value: Optional[str]) -> Optional[str]:
    value = normalize_text(value)
    if value is None:
        return None
    if not is_valid_pincode(value):
        raise ValueError(MESSAGES["pincode"])
    return value


def check_optional_rti_query(value: Optional[str]) -> Optional[str]:
    value = normalize_text(value)
    if value is None:
        return None
    if not RTI_QUERY_MIN_LENGTH <= len(value) <= RTI_QUERY_MAX_LENGTH:
        raise ValueError(MESSAGES["rti_query_length"])
    return value


def check_optional_address(value: Optional[str]) -> Optional[str]:
    value = normalize_text(value)
    if value is not None and len(value) > ADDRESS_MAX_LENGTH:
        raise ValueError(MESSAGES["address_max_length"])
    return value


def check_optional_slug(value: Optional[str]) -> Optional[str]:
    value = normalize_text(value)
    if value is None:
        return None
    if len(value) > SLUG_MAX_LENGTH:
        raise ValueError(f"Must be at most {SLUG_MAX_LENGTH} characters")
    return value.lower()


def check_address(value: Optional[str]) -> str:
    value = normalize_text(value)
    if value is None:
        raise ValueError("Address is required")
    if not ADDRESS_MIN_LENGTH <= len(value) <= ADDRESS_MAX_LENGTH:
        raise ValueError(MESSAGES["address_length"])
    return value


VALIDATION_RULES = {
    "full_name": {
        "required": True,
        "min_length": FULL_NAME_MIN_LENGTH,
        "max_length": FULL_NAME_MAX_LENGTH,
        "message": MESSAGES["full_name_length"],
    },
    "email": {
        "required": True,
        "pattern": EMAIL_PATTERN,
        "normalize": "trim, lowercase",
        "message": MESSAGES["email"],
    },
    "mobile": {
        "required": True,
        "pattern": MOBILE_PATTERN,
        "normalize": "strip non-digits",
        "message": MESSAGES["mobile"],
    },
    "pincode": {
        "required": False,
        "pattern": PINCODE_PATTERN,
        "message": MESSAGES["pincode"],
    },
    "rti_query": {
        "required": False,
        "min_length": RTI_QUERY_MIN_LENGTH,
        "max_length": RTI_QUERY_MAX_LENGTH,
        "message": MESSAGES["rti_query_length"],
    },
    "address": {
        "required": False,
        "max_length": ADDRESS_MAX_LENGTH,
        "message": MESSAGES["address_max_length"],
    },
}
