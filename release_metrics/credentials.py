"""
Access token loading.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from .exceptions import CredentialReadError


def read_token(path: Union[str, Path]) -> str:
    """Read a bearer token from ``path``, trimming surrounding whitespace."""
    token_path = Path(path)
    try:
        token = token_path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialReadError(f"Cannot read token from {token_path}: {e}") from e
    if not token:
        raise CredentialReadError(f"Token file {token_path} is empty")
    return token
