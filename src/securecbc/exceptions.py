# -*- coding: utf-8 -*-
"""
Централизованные исключения пакета securecbc.

EN: Exception hierarchy for key handling, CBC encryption/decryption and the
entropy source. Messages and context never carry key material, IVs,
plaintext or ciphertext.

Иерархия:
    CryptoError (базовое)
    ├── CryptoKeyError
    │   └── InvalidKeyError
    │       └── InvalidKeyLengthError
    ├── EncryptionError
    │   └── EncryptionFailedError
    ├── DecryptionError
    │   ├── PaddingOrLengthError
    │   ├── InvalidIVLengthError
    │   └── IntegrityError
    ├── EntropySourceError
    └── ValidationError
        └── InvalidInputError

Security Note:
    PaddingOrLengthError is the only signal that a ciphertext is malformed.
    It is NOT an integrity check: decrypting with a wrong key or IV usually
    succeeds silently and returns garbage.

    StructuredParseFailure is a result value, not an exception: a failed
    parse after decryption is an expected outcome of a wrong key or IV.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

__all__: list[str] = [
    "CryptoError",
    "CryptoKeyError",
    "InvalidKeyError",
    "InvalidKeyLengthError",
    "EncryptionError",
    "EncryptionFailedError",
    "DecryptionError",
    "PaddingOrLengthError",
    "InvalidIVLengthError",
    "IntegrityError",
    "EntropySourceError",
    "ValidationError",
    "InvalidInputError",
    "StructuredParseFailure",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class CryptoError(Exception):
    """
    Базовое исключение для всех ошибок пакета.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        algorithm: Имя алгоритма, вызвавшего ошибку (опционально)
        context: Дополнительный контекст без секретов (опционально)

    Example:
        >>> try:
        ...     decrypt_bytes(ciphertext, key, iv)
        ... except CryptoError as e:
        ...     logger.error("Crypto failed: %s", e)
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm
        self.context = context or {}

    def __str__(self) -> str:
        """
        Строковое представление исключения.

        Example:
            >>> str(InvalidKeyLengthError("3DES-EDE3-CBC", "24", 16))
            'InvalidKeyLengthError: Invalid key length for 3DES-EDE3-CBC: expected 24 bytes, got 16 bytes [algorithm=3DES-EDE3-CBC] (expected_size=24, actual_size=16)'
        """
        parts = [self.__class__.__name__, ": ", self.message]

        if self.algorithm:
            parts.append(f" [algorithm={self.algorithm}]")

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"algorithm={self.algorithm!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# KEY ERRORS
# ==============================================================================


class CryptoKeyError(CryptoError):
    """
    Базовая ошибка для операций с ключами.

    Note:
        Названа CryptoKeyError чтобы не конфликтовать с builtin KeyError.
    """


class InvalidKeyError(CryptoKeyError):
    """Key cannot be used for the requested operation (wrong family, wrong type)."""


class InvalidKeyLengthError(InvalidKeyError):
    """
    Неверная длина ключа для выбранного семейства шифров.

    Raised at key construction time; keys are never truncated or padded.

    Attributes:
        expected: Accepted size in bytes (``"24"`` or a range like ``"4..56"``)
        actual: Supplied size in bytes
    """

    def __init__(self, algorithm: str, expected: str, actual: int) -> None:
        message = (
            f"Invalid key length for {algorithm}: "
            f"expected {expected} bytes, got {actual} bytes"
        )
        super().__init__(
            message,
            algorithm=algorithm,
            context={"expected_size": expected, "actual_size": actual},
        )
        self.expected = expected
        self.actual = actual


# ==============================================================================
# ENCRYPTION / DECRYPTION ERRORS
# ==============================================================================


class EncryptionError(CryptoError):
    """Базовая ошибка шифрования."""


class EncryptionFailedError(EncryptionError):
    """The cipher provider failed while encrypting."""


class DecryptionError(CryptoError):
    """Базовая ошибка расшифрования."""


class PaddingOrLengthError(DecryptionError):
    """
    Ciphertext is malformed.

    Raised when the ciphertext length is not a multiple of the block size
    or when the PKCS#7 padding is structurally invalid after decryption.

    Warning:
        Absence of this error says nothing about authenticity. A wrong key or
        IV that happens to leave valid padding decrypts "successfully".
    """


class InvalidIVLengthError(DecryptionError):
    """
    IV has the wrong size.

    Attributes:
        expected_size: Required IV size in bytes
        actual_size: Supplied IV size in bytes
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        expected_size: Optional[int] = None,
        actual_size: Optional[int] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if expected_size is not None:
            context["expected_iv_size"] = expected_size
        if actual_size is not None:
            context["actual_iv_size"] = actual_size

        super().__init__(message, algorithm=algorithm, context=context)
        self.expected_size = expected_size
        self.actual_size = actual_size


class IntegrityError(DecryptionError):
    """MAC verification failed in the authenticated (encrypt-then-MAC) mode."""


# ==============================================================================
# ENTROPY
# ==============================================================================


class EntropySourceError(CryptoError):
    """
    The secure random source is unavailable or produced degenerate output.

    Fatal: there is no fallback random source.
    """


# ==============================================================================
# VALIDATION ERRORS
# ==============================================================================


class ValidationError(CryptoError):
    """Базовая ошибка валидации входных данных."""


class InvalidInputError(ValidationError):
    """
    Input has the wrong type or encoding (e.g. malformed base64 text).
    """


# ==============================================================================
# RESULT VALUES
# ==============================================================================


@dataclass(frozen=True)
class StructuredParseFailure:
    """
    Recovered plaintext could not be turned back into a structured value.

    This is a value, not an exception: it is the expected outcome of
    decrypting with a wrong key or IV.

    Attributes:
        reason: Short operational description (no secrets).
        cause: Class name of the underlying error, if any.
    """

    reason: str
    cause: Optional[str] = None

    def __str__(self) -> str:
        if self.cause:
            return f"{self.reason} ({self.cause})"
        return self.reason
