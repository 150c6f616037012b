"""
Credential generation for capabilities that need a secret.

Passwords come from the `secrets` CSPRNG and are wrapped in pydantic's
SecretStr, so str()/repr() of a credential descriptor never show them.
"""

import logging
import secrets
import string

from pydantic import SecretStr

from .errors import CredentialGenerationError, InvalidConfigurationError
from .resources import ResourceDescriptor, ResourceKind
from .settings import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

# Safe inside connection-string userinfo and shell-quoted env files
SPECIAL_CHARACTERS = "!#%+-=_~"
ALPHABET = string.ascii_letters + string.digits + SPECIAL_CHARACTERS

_REQUIRED_CLASSES = (
    string.ascii_lowercase,
    string.ascii_uppercase,
    string.digits,
    SPECIAL_CHARACTERS,
)


def meets_policy(password: str) -> bool:
    """True when the password satisfies the minimum strength policy."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return False
    return all(any(c in chars for c in password) for chars in _REQUIRED_CLASSES)


def generate_password(length: int = 24) -> SecretStr:
    """
    Generate a fresh password.

    Args:
        length: Password length, at least 16

    Returns:
        SecretStr holding the password

    Raises:
        InvalidConfigurationError: If length is below the policy minimum
        CredentialGenerationError: If the random source fails
    """
    if length < MIN_PASSWORD_LENGTH:
        raise InvalidConfigurationError([f"password length must be at least {MIN_PASSWORD_LENGTH}, got {length}"])

    try:
        # one character from every required class, the rest from the full alphabet
        chars = [secrets.choice(chars) for chars in _REQUIRED_CLASSES]
        chars += [secrets.choice(ALPHABET) for _ in range(length - len(chars))]
        for i in range(len(chars) - 1, 0, -1):
            j = secrets.randbelow(i + 1)
            chars[i], chars[j] = chars[j], chars[i]
    except (OSError, NotImplementedError) as e:
        logger.error("Secure random source unavailable; cannot generate credential")
        raise CredentialGenerationError("secure random source unavailable") from e

    return SecretStr("".join(chars))


def make_credential(name: str, username: str, length: int = 24, labels=None) -> ResourceDescriptor:
    """Build a sensitive Credential descriptor with a freshly generated password."""
    password = generate_password(length)
    logger.debug(f"Generated credential {name} for user {username}")
    return ResourceDescriptor(
        kind=ResourceKind.CREDENTIAL,
        name=name,
        fields={
            "username": username,
            "password": password,
            "labels": dict(labels or {}),
        },
        sensitive=True,
    )
