"""Authenticated encryption of stored file payloads.

A sealed file is a fixed binary header followed by the ciphertext:

    magic     : 4 bytes   -> b"SFS1"
    version   : 1 byte    -> 0x01
    t_cost    : u32
    m_cost    : u32  (KiB)
    parallel  : u32
    salt      : 16 bytes
    nonce     : 12 bytes
    tag       : 16 bytes  (AES-256-GCM)
    ciphertext: remaining bytes

Every encrypt call draws a new salt and nonce, so the same plaintext under the
same passphrase never produces the same bytes. The header fields up to and
including the salt are bound as associated data, so editing the KDF
parameters or salt is caught by the tag check like any other tampering.
"""
from __future__ import annotations

import os
import struct

from argon2.exceptions import HashingError

from crypto.aead import aead_decrypt, aead_encrypt
from crypto.hash import derive_file_key
from utils.dataModels import (
    DEFAULT_M_COST_KiB,
    DEFAULT_PARALLELISM,
    DEFAULT_T_COST,
    SALT_SIZE,
    STORE_AAD_FMT,
    STORE_HDR_FMT,
    STORE_HDR_SIZE,
    STORE_MAGIC,
    STORE_VERSION,
    KdfParams,
    SealedPayload,
)
from utils.errors import ErrorKind, StoreResult

# Header KDF costs may exceed the larger of the configured and default costs
# by at most this factor; anything above is treated as corrupt
KDF_HEADROOM = 4


def _aad(kdf: KdfParams, salt: bytes) -> bytes:
    return struct.pack(STORE_AAD_FMT, STORE_MAGIC, STORE_VERSION, kdf.t_cost, kdf.m_cost_kib, kdf.parallelism, salt)


def _kdf_limit(kdf: KdfParams) -> KdfParams:
    return KdfParams(
        t_cost=max(kdf.t_cost, DEFAULT_T_COST) * KDF_HEADROOM,
        m_cost_kib=max(kdf.m_cost_kib, DEFAULT_M_COST_KiB) * KDF_HEADROOM,
        parallelism=max(kdf.parallelism, DEFAULT_PARALLELISM) * KDF_HEADROOM,
    )


def _kdf_in_bounds(kdf: KdfParams, limit: KdfParams) -> bool:
    return (
        1 <= kdf.t_cost <= limit.t_cost
        and 1 <= kdf.parallelism <= limit.parallelism
        and 8 * kdf.parallelism <= kdf.m_cost_kib <= limit.m_cost_kib
    )


def is_sealed(data: bytes) -> bool:
    return len(data) >= STORE_HDR_SIZE and data[: len(STORE_MAGIC)] == STORE_MAGIC


class CryptoCodec:
    """Seals and opens payloads with Argon2id-derived AES-256-GCM keys."""

    def __init__(self, kdf: KdfParams | None = None) -> None:
        self.kdf = kdf or KdfParams()
        self.kdf_limit = _kdf_limit(self.kdf)

    def encrypt(self, plaintext: bytes, passphrase: str) -> SealedPayload:
        salt = os.urandom(SALT_SIZE)
        key = derive_file_key(passphrase, salt, self.kdf)
        nonce, ct, tag = aead_encrypt(key, plaintext, _aad(self.kdf, salt))
        return SealedPayload(kdf=self.kdf, salt=salt, nonce=nonce, ciphertext=ct, tag=tag)

    def decrypt(self, sealed: SealedPayload, passphrase: str) -> StoreResult[bytes]:
        if not _kdf_in_bounds(sealed.kdf, self.kdf_limit):
            return StoreResult.failure(ErrorKind.AUTHENTICATION_FAILED, "KDF parameters out of range")
        try:
            key = derive_file_key(passphrase, sealed.salt, sealed.kdf)
        except HashingError:
            return StoreResult.failure(ErrorKind.AUTHENTICATION_FAILED, "key derivation failed for header parameters")
        plaintext = aead_decrypt(key, sealed.nonce, sealed.ciphertext, sealed.tag, _aad(sealed.kdf, sealed.salt))
        if plaintext is None:
            return StoreResult.failure(ErrorKind.AUTHENTICATION_FAILED, "wrong passphrase or tampered file")
        return StoreResult.success(plaintext)

    @staticmethod
    def pack(sealed: SealedPayload) -> bytes:
        header = struct.pack(
            STORE_HDR_FMT,
            STORE_MAGIC,
            STORE_VERSION,
            sealed.kdf.t_cost,
            sealed.kdf.m_cost_kib,
            sealed.kdf.parallelism,
            sealed.salt,
            sealed.nonce,
            sealed.tag,
        )
        return header + sealed.ciphertext

    @staticmethod
    def unpack(data: bytes) -> StoreResult[SealedPayload]:
        if len(data) < STORE_HDR_SIZE:
            return StoreResult.failure(ErrorKind.AUTHENTICATION_FAILED, "file is too small to carry a header")
        magic, ver, t, m, p, salt, nonce, tag = struct.unpack(STORE_HDR_FMT, data[:STORE_HDR_SIZE])
        if magic != STORE_MAGIC:
            return StoreResult.failure(ErrorKind.AUTHENTICATION_FAILED, "file is not encrypted")
        if ver != STORE_VERSION:
            return StoreResult.failure(ErrorKind.AUTHENTICATION_FAILED, f"unsupported format version {ver}")
        return StoreResult.success(
            SealedPayload(
                kdf=KdfParams(t_cost=t, m_cost_kib=m, parallelism=p),
                salt=salt,
                nonce=nonce,
                ciphertext=data[STORE_HDR_SIZE:],
                tag=tag,
            )
        )

    def seal(self, plaintext: bytes, passphrase: str) -> bytes:
        return self.pack(self.encrypt(plaintext, passphrase))

    def open(self, data: bytes, passphrase: str) -> StoreResult[bytes]:
        unpacked = self.unpack(data)
        if not unpacked.ok:
            return StoreResult.failure(unpacked.error, unpacked.message)
        return self.decrypt(unpacked.value, passphrase)
