import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from typing import Tuple

from utils.dataModels import NONCE_SIZE, TAG_SIZE


def aead_encrypt(key: bytes, plaintext: bytes, aad: bytes | None = None) -> Tuple[bytes, bytes, bytes]:
    """AES-256-GCM with a fresh nonce. Returns (nonce, ciphertext, tag)."""
    nonce = os.urandom(NONCE_SIZE)
    sealed = AESGCM(key).encrypt(nonce, plaintext, aad)
    return nonce, sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]


def aead_decrypt(key: bytes, nonce: bytes, ct: bytes, tag: bytes, aad: bytes | None = None) -> bytes | None:
    """Verify and decrypt; None when the tag does not match."""
    try:
        return AESGCM(key).decrypt(nonce, ct + tag, aad)
    except InvalidTag:
        return None
