from __future__ import annotations

import secrets
import string

_NAME_ALPHABET = string.ascii_lowercase + string.digits
_PASSWORD_SYMBOLS = "!@#$%^&*()-_=+"


def create_random_name(prefix: str, *, suffix_length: int = 8) -> str:
    """Return `prefix` followed by a random lowercase alphanumeric suffix.

    SQL server and web app names become DNS labels, so they must be globally unique
    and lowercase.
    """

    if suffix_length <= 0:
        raise ValueError("suffix_length must be positive")

    suffix = "".join(secrets.choice(_NAME_ALPHABET) for _ in range(suffix_length))
    return f"{prefix}{suffix}"


def create_password(*, length: int = 16) -> str:
    """Generate a password satisfying the Azure SQL complexity rules.

    At least one uppercase letter, one lowercase letter, one digit and one symbol.
    """

    if length < 8:
        raise ValueError("length must be at least 8")

    classes = [string.ascii_uppercase, string.ascii_lowercase, string.digits, _PASSWORD_SYMBOLS]
    chars = [secrets.choice(c) for c in classes]
    pool = "".join(classes)
    chars.extend(secrets.choice(pool) for _ in range(length - len(chars)))

    # Required characters must not always sit at the front.
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
