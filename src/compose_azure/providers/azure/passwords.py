"""
Administrator password generation.

Azure requires 8-128 characters drawn from at least three of: upper case,
lower case, digits, symbols. Generated passwords always contain all four.
"""

import secrets
import string

import compose_azure.constants as CONSTANTS

_CHARSET = string.ascii_letters + string.digits + CONSTANTS.PASSWORD_SYMBOLS
_REQUIRED_CLASSES = (
    string.ascii_uppercase,
    string.ascii_lowercase,
    string.digits,
    CONSTANTS.PASSWORD_SYMBOLS,
)


def generate_password(length: int = CONSTANTS.PASSWORD_LENGTH) -> str:
    """
    Generate a random administrator password.

    Args:
        length: Password length (minimum 8)

    Raises:
        ValueError: If length is below the Azure minimum
    """
    if length < CONSTANTS.PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password length must be at least {CONSTANTS.PASSWORD_MIN_LENGTH}")

    chars = [secrets.choice(_CHARSET) for _ in range(length)]

    # Put one character of each class at distinct random positions
    positions = list(range(length))
    for char_class in _REQUIRED_CLASSES:
        index = positions.pop(secrets.randbelow(len(positions)))
        chars[index] = secrets.choice(char_class)

    return "".join(chars)
