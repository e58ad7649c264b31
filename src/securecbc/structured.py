# -*- coding: utf-8 -*-
"""
RU: Шифрование XML-элементов поверх текстового API.

EN: Encrypt and decrypt XML elements through the text API.

encrypt_structured serializes an ElementTree element to UTF-8 XML text and
encrypts it with encrypt_text. decrypt_structured reverses this and parses the
recovered text. Any failure on the way back (bad base64, misaligned ciphertext,
invalid padding, malformed XML) is returned as a failed StructuredResult
instead of being raised. A wrong key or IV normally ends up there: garbage
rarely parses as XML.

Raw key bytes are treated as Blowfish keys.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Final, Optional, Union

from securecbc.config import TEXT_ENCODING, CipherFamily
from securecbc.exceptions import CryptoError, StructuredParseFailure
from securecbc.keys import CipherKey, KeyMaterial, coerce_key
from securecbc.symmetric import TextEncryptionResult, decrypt_text, encrypt_text

_LOGGER: Final = logging.getLogger(__name__)

StructuredKey = Union[CipherKey, KeyMaterial]


@dataclass(frozen=True)
class StructuredResult:
    """
    Outcome of decrypt_structured: either a parsed element or a failure.

    Attributes:
        value: parsed root element when decryption and parsing succeeded.
        error: StructuredParseFailure describing what went wrong otherwise.
    """

    value: Optional[ET.Element] = None
    error: Optional[StructuredParseFailure] = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("exactly one of value or error must be set")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ET.Element:
        """Return the element or raise ValueError carrying the failure reason."""
        if self.value is None:
            raise ValueError(str(self.error))
        return self.value

    @classmethod
    def success(cls, value: ET.Element) -> StructuredResult:
        return cls(value=value)

    @classmethod
    def failure(
        cls, reason: str, cause: Optional[BaseException] = None
    ) -> StructuredResult:
        return cls(
            error=StructuredParseFailure(
                reason=reason,
                cause=cause.__class__.__name__ if cause is not None else None,
            )
        )


def _resolve_key(key: StructuredKey) -> CipherKey:
    if isinstance(key, CipherKey):
        return key
    return coerce_key(key, CipherFamily.BLOWFISH)


def encrypt_structured(element: ET.Element, key: StructuredKey) -> TextEncryptionResult:
    """
    Serialize ``element`` and encrypt it via the text API.

    Args:
        element: XML element (subtree is included).
        key: CipherKey, or raw Blowfish key bytes.

    Returns:
        TextEncryptionResult with base64 ciphertext and IV.
    """
    text = ET.tostring(element, encoding="unicode")
    return encrypt_text(text, _resolve_key(key))


def decrypt_structured(
    ciphertext: str, key: StructuredKey, iv: str
) -> StructuredResult:
    """
    Decrypt base64 ciphertext and parse it back into an XML element.

    Never raises for wrong keys, wrong IVs or corrupted input; inspect
    ``result.ok`` instead. Key length errors still raise, they are caller
    misuse rather than a decryption outcome.
    """
    resolved = _resolve_key(key)
    try:
        text = decrypt_text(ciphertext, resolved, iv)
    except CryptoError as exc:
        _LOGGER.info("Structured decryption failed: %s", exc.__class__.__name__)
        return StructuredResult.failure("decryption failed", exc)

    try:
        element = ET.fromstring(text.encode(TEXT_ENCODING))
    except ET.ParseError as exc:
        _LOGGER.info("Recovered plaintext is not well-formed XML")
        return StructuredResult.failure("recovered text is not well-formed XML", exc)

    return StructuredResult.success(element)


__all__ = [
    "StructuredResult",
    "encrypt_structured",
    "decrypt_structured",
]
