"""Structural validation for email addresses."""

from shared.exceptions import ValidationError

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def is_valid_email(email: str) -> bool:
    """Check that an email address follows a basic valid structure.

    Exactly one @, non-empty local and domain parts, a dotted domain without
    leading or trailing hyphens in its labels, no consecutive dots, no
    whitespace and no forbidden characters.
    """
    if not email or len(email) > 254:
        return False

    if any(ch.isspace() for ch in email):
        return False

    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False

    if "." not in domain_part:
        return False

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            return False

    if ".." in local_part or ".." in domain_part:
        return False

    return not any(forbidden in email for forbidden in _FORBIDDEN)


def normalize_email(email: str) -> str:
    """Return the canonical form used for storage and lookup."""
    email = email.strip()
    if not is_valid_email(email):
        raise ValidationError({"email": ["Invalid email format"]})
    return email.lower()
