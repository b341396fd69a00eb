"""Shared validation utilities"""

import re
from typing import Optional

from ..exceptions import ValidationError

MIN_PASSWORD_LENGTH = 6
MIN_PHONE_LENGTH = 6


def require(value: Optional[str], field: str) -> str:
    """Return the stripped value or raise if it is missing or blank"""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValidationError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValidationError("Invalid email format")

    return email


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Normalize a customer phone number.

    Keeps a leading "+" and digits only; the backend accepts any number with
    at least six characters, so no country-specific length is enforced.

    Raises:
        ValidationError: If fewer than six digits remain
    """
    if not phone:
        return phone

    stripped = phone.strip()
    digits = re.sub(r"\D", "", stripped)
    if len(digits) < MIN_PHONE_LENGTH:
        raise ValidationError("Phone number is too short")

    return f"+{digits}" if stripped.startswith("+") else digits


def validate_password(password: Optional[str]) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return password


def validate_rating(rating: int) -> int:
    if not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")
    return rating
