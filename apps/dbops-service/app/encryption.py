"""AES-128-GCM handling for the ClickHouse password supplied through the environment."""

import base64
import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .config import ENCRYPTION_KEY

NONCE_SIZE = 12


def _get_key() -> bytes:
    return bytes.fromhex(ENCRYPTION_KEY)


def encrypt(plaintext: str) -> str:
    nonce = os.urandom(NONCE_SIZE)
    ct = AESGCM(_get_key()).encrypt(nonce, plaintext.encode(), None)
    return base64.b64encode(nonce + ct).decode()


def decrypt(ciphertext: str) -> str:
    data = base64.b64decode(ciphertext)
    return AESGCM(_get_key()).decrypt(data[:NONCE_SIZE], data[NONCE_SIZE:], None).decode()
