from argon2.low_level import hash_secret_raw, Type as Argon2Type
from cryptography.hazmat.primitives import hashes

from utils.dataModels import KdfParams


def sha3_512_bytes(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA3_512())
    digest.update(data)
    return digest.finalize()


def derive_file_key(passphrase: str, salt: bytes, kdf: KdfParams) -> bytes:
    """Kfile = Argon2id(SHA3-512(passphrase), salt) -> 32 bytes"""
    prehash = sha3_512_bytes(passphrase.encode("utf-8"))
    return hash_secret_raw(
        secret=prehash,
        salt=salt,
        time_cost=kdf.t_cost,
        memory_cost=kdf.m_cost_kib,
        parallelism=kdf.parallelism,
        hash_len=32,
        type=Argon2Type.ID,
    )
