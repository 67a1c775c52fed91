import struct

from dataclasses import dataclass

DEFAULT_T_COST = 4
DEFAULT_M_COST_KiB = 262144  # 256 MiB (tune per device)
DEFAULT_PARALLELISM = 2
DEFAULT_LOCK_TIMEOUT = 10.0

STORE_MAGIC = b"SFS1"
STORE_VERSION = 1
STORE_HDR_FMT = ">4sBIII16s12s16s"  # magic, ver, t, m, p, salt(16), nonce(12), tag(16)
STORE_HDR_SIZE = struct.calcsize(STORE_HDR_FMT)
STORE_AAD_FMT = ">4sBIII16s"  # header fields bound into the tag
SALT_SIZE = 16
NONCE_SIZE = 12
TAG_SIZE = 16

# In-flight writes live next to their target under this prefix
TEMP_PREFIX = ".tmp-"


@dataclass(frozen=True)
class KdfParams:
    t_cost: int = DEFAULT_T_COST
    m_cost_kib: int = DEFAULT_M_COST_KiB
    parallelism: int = DEFAULT_PARALLELISM


@dataclass(frozen=True)
class SealedPayload:
    """One encrypted file: everything needed to derive the key and verify it."""
    kdf: KdfParams
    salt: bytes
    nonce: bytes
    ciphertext: bytes
    tag: bytes


@dataclass(frozen=True)
class FileInfo:
    name: str
    size: int
    modified_at: str
    encrypted: bool
