# -*- coding: utf-8 -*-
"""
RU: Единый потокобезопасный источник криптографически стойких случайных байтов
и генерация IV.

EN: Process-wide secure random source and IV generation.

A single SecureRandomSource is created lazily on first use and shared by all
callers (key generation and IV generation). It wraps ``secrets.SystemRandom``
(the operating system CSPRNG) and serialises access with an internal lock, so
callers never synchronise on it themselves.

IV policy:
    - every encryption draws a fresh 8-byte IV from this source;
    - IVs are never cached, counted or derived from previous IVs;
    - the library stores no IV; transporting it is the caller's job.

There is no fallback source. Failure of the OS entropy source raises
EntropySourceError, which callers should treat as fatal.
"""

from __future__ import annotations

import logging
import secrets
import threading
from typing import Final, Optional

from securecbc.config import IV_SIZE
from securecbc.exceptions import EntropySourceError

_LOGGER: Final = logging.getLogger(__name__)

_MAX_RANDOM_BYTES: Final[int] = 1024 * 1024
_DEGENERATE_CHECK_MIN: Final[int] = 8


class SecureRandomSource:
    """
    Thread-safe singleton around the OS CSPRNG.

    Attributes:
        _instance: Singleton instance
        _lock: Lock guarding singleton creation

    Example:
        >>> rng = SecureRandomSource.get_instance()
        >>> len(rng.random_bytes(8))
        8
        >>> rng is SecureRandomSource.get_instance()
        True
    """

    _instance: Optional[SecureRandomSource] = None
    _lock: threading.Lock = threading.Lock()

    def __init__(self) -> None:
        if SecureRandomSource._instance is not None:
            raise RuntimeError(
                "SecureRandomSource is a singleton. "
                "Use SecureRandomSource.get_instance()"
            )
        self._rng = secrets.SystemRandom()
        self._draw_lock = threading.Lock()
        _LOGGER.debug("SecureRandomSource initialized")

    @classmethod
    def get_instance(cls) -> SecureRandomSource:
        """
        Получить singleton instance источника.

        Thread Safety:
            Thread-safe double-checked locking
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """
        Сбросить singleton (только для тестов).
        """
        with cls._lock:
            cls._instance = None
            _LOGGER.warning("SecureRandomSource instance reset (testing only!)")

    def random_bytes(self, n: int) -> bytes:
        """
        Draw ``n`` cryptographically secure random bytes.

        Args:
            n: number of bytes (1..1MiB).

        Returns:
            Random bytes of requested length.

        Raises:
            ValueError: if n is out of range.
            EntropySourceError: if the OS source fails or output is degenerate.
        """
        if not isinstance(n, int) or n <= 0 or n > _MAX_RANDOM_BYTES:
            raise ValueError("Requested random size must be in 1..1MiB")

        try:
            with self._draw_lock:
                out = self._rng.randbytes(n)
        except (OSError, NotImplementedError) as exc:
            _LOGGER.critical("OS entropy source unavailable: %s", exc.__class__.__name__)
            raise EntropySourceError("Secure random source unavailable") from exc

        _degenerate_check(out)
        return out


def _degenerate_check(data: bytes) -> None:
    """
    Repetition sanity check on RNG output.

    An 8-byte draw with all bytes equal happens with probability 2^-56 on a
    healthy source.

    Raises:
        EntropySourceError: if every byte of a sample is identical.
    """
    if len(data) >= _DEGENERATE_CHECK_MIN and all(b == data[0] for b in data):
        _LOGGER.critical("Degenerate RNG output detected")
        raise EntropySourceError("Degenerate RNG output (all bytes equal)")


def generate_random_bytes(n: int) -> bytes:
    """Draw ``n`` random bytes from the shared source."""
    return SecureRandomSource.get_instance().random_bytes(n)


def generate_iv() -> bytes:
    """
    Generate a fresh CBC initialization vector.

    Returns:
        8 random bytes (block size of Blowfish and TripleDES).
    """
    iv = generate_random_bytes(IV_SIZE)
    _LOGGER.debug("Generated %d-byte IV", IV_SIZE)
    return iv


__all__ = [
    "SecureRandomSource",
    "generate_random_bytes",
    "generate_iv",
]
