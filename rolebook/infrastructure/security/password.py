"""
Хэширование паролей.
"""

import hashlib


def sha256_hex(value: str) -> str:
    """SHA-256 хэш строки в hex-представлении (64 символа)."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()
