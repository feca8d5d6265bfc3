import re

from carte_visite.errors import MalformedPhoneError

_NON_DIGIT = re.compile(r"[^0-9]")
_PHONE_GROUPS = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


def parse_phone(phone: str) -> str:
    """Return the phone grouped by pairs ("61 16 18 18"), or raise MalformedPhoneError."""
    cleaned = _NON_DIGIT.sub("", phone)
    match = _PHONE_GROUPS.fullmatch(cleaned)
    if not match:
        raise MalformedPhoneError(phone)
    return " ".join(match.groups())


def format_phone(phone: str) -> str:
    # Display only: anything that is not 8 digits is shown as typed
    try:
        return parse_phone(phone)
    except MalformedPhoneError:
        return phone


def slugify_name(name: str) -> str:
    slug = _NON_SLUG.sub("_", name.strip().lower())
    return slug.strip("_")
