import re

from studysphere.errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Raises:
        ValidationError: If password is shorter than MIN_PASSWORD_LENGTH
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")


def normalize_email(email: str) -> str:
    """Return the canonical (trimmed, lowercase) email or raise ValidationError."""
    normalized = email.strip().lower()
    if not EMAIL_RE.fullmatch(normalized):
        raise ValidationError("Invalid email address")
    return normalized


def validate_name(name: str) -> str:
    stripped = name.strip()
    if not stripped:
        raise ValidationError("Name is required")
    return stripped
