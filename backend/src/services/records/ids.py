"""
Identifier generation for records.
"""
import secrets
from typing import Container

from .errors import IdentifierExhausted

DEFAULT_ID_BYTES = 10
MAX_ATTEMPTS = 8


def new_token(nbytes: int = DEFAULT_ID_BYTES) -> str:
    """Random hex token from the OS CSPRNG (2 * nbytes characters)."""
    return secrets.token_hex(nbytes)


def new_unique_token(taken: Container[str], nbytes: int = DEFAULT_ID_BYTES) -> str:
    """Draw a token not present in ``taken``, redrawing on collision."""
    for _ in range(MAX_ATTEMPTS):
        token = new_token(nbytes)
        if token not in taken:
            return token
    raise IdentifierExhausted(
        f"no free identifier after {MAX_ATTEMPTS} attempts ({nbytes} bytes)"
    )
