"""AES-256-GCM field encryption for sensitive employee data."""

import base64
import logging
import os
import re
from typing import Any, Dict, Mapping, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from config import ApplicationConfig

logger = logging.getLogger(__name__)

# Draft key holding the encrypted SSN; the plain "ssn" key is never stored
DRAFT_SSN_KEY = "ssn_encrypted"


class EncryptionError(Exception):
    """Raised when a value cannot be decrypted"""


class FieldEncryptor:
    """Encrypts individual column values.

    Stored format: urlsafe-base64(nonce (12 bytes) + ciphertext + tag)
    """

    NONCE_SIZE = 12

    def __init__(self, key: Optional[str] = None) -> None:
        self._aesgcm = AESGCM(self._decode_key(key or ApplicationConfig.ENCRYPTION_KEY))

    @staticmethod
    def _decode_key(key: str) -> bytes:
        padded_key = key + "=" * (-len(key) % 4)
        try:
            decoded = base64.urlsafe_b64decode(padded_key)
        except ValueError as e:
            raise ValueError(f"Invalid base64-encoded encryption key: {type(e).__name__}")
        if len(decoded) != 32:
            raise ValueError("Encryption key must be 32 bytes (256 bits)")
        return decoded

    def encrypt(self, plaintext: str) -> str:
        nonce = os.urandom(self.NONCE_SIZE)
        ciphertext = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.urlsafe_b64encode(nonce + ciphertext).decode("ascii")

    def decrypt(self, token: str) -> str:
        try:
            raw = base64.urlsafe_b64decode(token.encode("ascii"))
            nonce, ciphertext = raw[: self.NONCE_SIZE], raw[self.NONCE_SIZE :]
            return self._aesgcm.decrypt(nonce, ciphertext, None).decode("utf-8")
        except (InvalidTag, ValueError) as e:
            raise EncryptionError("Unable to decrypt value") from e


def normalize_ssn(ssn: str) -> str:
    """Canonical 123-45-6789 form"""
    digits = re.sub(r"\D", "", ssn)
    return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"


def mask_ssn(ssn: Optional[str]) -> Optional[str]:
    """***-**-6789; only the last four digits are ever exposed"""
    if not ssn:
        return None
    digits = re.sub(r"\D", "", ssn)
    return f"***-**-{digits[-4:]}"


def seal_draft_patch(patch: Mapping[str, Any], encryptor: FieldEncryptor) -> Dict[str, Any]:
    """Replace a plain SSN in a draft patch with its ciphertext.

    Client-supplied ciphertext or masked values are dropped, and a blank SSN
    leaves the stored one in place.
    """
    sealed = {k: v for k, v in patch.items() if k not in (DRAFT_SSN_KEY, "ssn_masked")}
    ssn = sealed.pop("ssn", None)
    if isinstance(ssn, str) and ssn.strip():
        sealed[DRAFT_SSN_KEY] = encryptor.encrypt(ssn.strip())
    return sealed


def reveal_draft(data: Optional[Mapping[str, Any]], encryptor: FieldEncryptor) -> Dict[str, Any]:
    """Draft form state with the SSN decrypted, for validation and submission"""
    revealed = dict(data or {})
    token = revealed.pop(DRAFT_SSN_KEY, None)
    if token and "ssn" not in revealed:
        try:
            revealed["ssn"] = encryptor.decrypt(token)
        except EncryptionError:
            logger.warning("Draft SSN could not be decrypted")
    return revealed


def masked_draft(data: Optional[Mapping[str, Any]], encryptor: FieldEncryptor) -> Dict[str, Any]:
    """Draft form state safe to return to a client"""
    masked = dict(data or {})
    token = masked.pop(DRAFT_SSN_KEY, None)
    ssn = masked.pop("ssn", None)
    if token:
        try:
            ssn = encryptor.decrypt(token)
        except EncryptionError:
            logger.warning("Draft SSN could not be decrypted")
    if isinstance(ssn, str) and ssn:
        masked["ssn_masked"] = mask_ssn(ssn)
    return masked
