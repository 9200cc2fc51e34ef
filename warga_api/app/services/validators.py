"""
Input validation helpers shared by the resident and household services.

Every helper either returns the normalised value or raises
``ValidationError`` with a message suitable for the API response.
"""

import math
import re
from typing import Any, Iterable, List, Mapping, Optional

from warga_api.app.core.db import SQLITE_MAX_INTEGER
from warga_api.app.core.exceptions import ValidationError


NIK_PATTERN = re.compile(r"[0-9]{16}")
DIGITS_PATTERN = re.compile(r"[0-9]+")
# Digits in SQLITE_MAX_INTEGER; longer digit strings are out of range.
MAX_INTEGER_DIGITS = len(str(SQLITE_MAX_INTEGER))

GENDERS = ("Laki-laki", "Perempuan")


def is_blank(value: Any) -> bool:
    """``None``, empty and whitespace-only strings count as not provided."""
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(values: Mapping[str, Any], names: Iterable[str]) -> None:
    missing: List[str] = [name for name in names if is_blank(values.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def validate_nik(nik: str) -> str:
    if not NIK_PATTERN.fullmatch(nik):
        raise ValidationError("nik must be 16 digits")
    return nik


def validate_gender(value: Any) -> str:
    if value not in GENDERS:
        raise ValidationError("jenisKelamin must be either Laki-laki or Perempuan")
    return value


def validate_text(name: str, value: Any) -> str:
    """A text field that may be replaced but never emptied."""
    if is_blank(value):
        raise ValidationError(f"{name} cannot be empty")
    return value


def parse_member_count(value: Any) -> int:
    """Parse ``jumlahAnggota``: any number (or numeric string) of at least 1.

    Fractional values are truncated, so ``"2.7"`` is stored as ``2``.
    Counts beyond the storable integer range are rejected.
    """
    error = ValidationError("jumlahAnggota must be a positive number")
    if isinstance(value, bool):
        raise error
    if isinstance(value, int):
        count = value
    elif isinstance(value, (float, str)):
        try:
            number = float(value.strip() if isinstance(value, str) else value)
        except ValueError:
            raise error from None
        if not math.isfinite(number):
            raise error
        count = int(number)
    else:
        raise error
    if count < 1 or count > SQLITE_MAX_INTEGER:
        raise error
    return count


def parse_reference(name: str, value: Any) -> Optional[int]:
    """Parse an integer reference such as ``keluargaId`` or ``rumahId``.

    ``None``, ``""`` and zero (``0`` or ``"0"``) mean "no reference" and
    return ``None``.
    """
    error = ValidationError(f"{name} must be a positive integer")
    if isinstance(value, bool):
        raise error
    if value is None or value == "" or value == 0:
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and DIGITS_PATTERN.fullmatch(value.strip()):
        digits = value.strip().lstrip("0") or "0"
        if len(digits) > MAX_INTEGER_DIGITS:
            raise error
        number = int(digits)
    else:
        raise error
    if number == 0:
        return None
    if number < 1 or number > SQLITE_MAX_INTEGER:
        raise error
    return number


def parse_text_reference(value: Optional[str]) -> Optional[str]:
    """Parse a text reference such as ``kepalaKeluargaId``; blank clears it."""
    if is_blank(value):
        return None
    return value.strip()
