import re
from dataclasses import dataclass
from datetime import datetime

# Characters stripped from phone input before parsing
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")
# Leading numeric prefix, same grammar as a decimal float literal
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class User:
    """Domain model representing a registered user."""
    id: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    phone: int | float | None = None
    password_hash: str | None = None

    def to_public(self) -> dict:
        """Sanitized view, never includes password_hash."""
        return {
            'id': self.id,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'phone': self.phone,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }


@dataclass(frozen=True)
class ProfileUpdate:
    """Partial profile changes. None means keep the current value."""
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None


def normalize_phone(raw: str | int | float | None) -> int | float | None:
    """Convert user-supplied phone input to the numeric value stored.

    Separators (whitespace, dashes, parentheses) are stripped and the leading
    numeric prefix is parsed. Returns None when nothing numeric remains, in
    which case the phone field is omitted.

    >>> normalize_phone("06 12-34 (56) 78")
    612345678
    >>> normalize_phone("not-a-phone") is None
    True
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw

    cleaned = _PHONE_SEPARATORS.sub("", raw)
    if not cleaned:
        return None

    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None

    value = float(match.group(0))
    if value.is_integer():
        return int(value)
    return value
