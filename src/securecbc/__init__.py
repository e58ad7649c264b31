"""
securecbc: Blowfish and TripleDES CBC encryption with a fresh random IV per call.

EN: Every encryption returns the IV it used next to the ciphertext; every
decryption takes that IV back as an explicit argument. Ciphertexts are NOT
authenticated: a wrong key or IV usually decrypts to garbage without error.
See securecbc.authenticated for an opt-in encrypt-then-MAC mode.

Example:
    >>> from securecbc import CipherFamily, generate_key, encrypt_text, decrypt_text
    >>> key = generate_key(CipherFamily.BLOWFISH)
    >>> ct, iv = encrypt_text("hello world", key)
    >>> decrypt_text(ct, key, iv)
    'hello world'
"""

from .config import BLOCK_SIZE, IV_SIZE, CipherFamily, FamilyConfig
from .exceptions import (
    CryptoError,
    DecryptionError,
    EncryptionError,
    EntropySourceError,
    IntegrityError,
    InvalidInputError,
    InvalidIVLengthError,
    InvalidKeyError,
    InvalidKeyLengthError,
    PaddingOrLengthError,
    StructuredParseFailure,
)
from .keys import CipherKey, generate_key, key_from_bytes
from .random_source import SecureRandomSource, generate_iv
from .symmetric import (
    CbcCipher,
    EncryptionResult,
    TextEncryptionResult,
    decrypt_bytes,
    decrypt_text,
    encrypt_bytes,
    encrypt_text,
)
from .streams import CipherStream, StreamEncryptionResult, decrypt_stream, encrypt_stream
from .structured import StructuredResult, decrypt_structured, encrypt_structured
from .utils import read_whole_stream

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "BLOCK_SIZE",
    "IV_SIZE",
    "CipherFamily",
    "FamilyConfig",
    # Errors
    "CryptoError",
    "DecryptionError",
    "EncryptionError",
    "EntropySourceError",
    "IntegrityError",
    "InvalidInputError",
    "InvalidIVLengthError",
    "InvalidKeyError",
    "InvalidKeyLengthError",
    "PaddingOrLengthError",
    "StructuredParseFailure",
    # Keys and IVs
    "CipherKey",
    "generate_key",
    "key_from_bytes",
    "SecureRandomSource",
    "generate_iv",
    # Cipher pipeline
    "CbcCipher",
    "EncryptionResult",
    "TextEncryptionResult",
    "encrypt_bytes",
    "decrypt_bytes",
    "encrypt_text",
    "decrypt_text",
    "CipherStream",
    "StreamEncryptionResult",
    "encrypt_stream",
    "decrypt_stream",
    "read_whole_stream",
    "StructuredResult",
    "encrypt_structured",
    "decrypt_structured",
]
