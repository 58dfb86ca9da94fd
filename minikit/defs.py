"""Shared constants, flags, small records and bit helpers for the mapper."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Iterable, MutableSequence

IDX_MAGIC = b"MMI\x02"
MAX_SEG = 255
CIGAR_STR = "MIDNSHP=XB"

PARENT_UNSET = -1
PARENT_TMP_PRI = -2

SEED_SEG_SHIFT = 48
SEED_SEG_MASK = 0xFF << SEED_SEG_SHIFT

_U32 = 0xFFFFFFFF


class MapFlag(enum.IntFlag):
    """Mapping option flags."""

    NO_DIAG = 0x001
    NO_DUAL = 0x002
    CIGAR = 0x004
    OUT_SAM = 0x008
    NO_QUAL = 0x010
    OUT_CG = 0x020
    OUT_CS = 0x040
    SPLICE = 0x080
    SPLICE_FOR = 0x100
    SPLICE_REV = 0x200
    NO_LJOIN = 0x400
    OUT_CS_LONG = 0x800
    SR = 0x1000
    FRAG_MODE = 0x2000
    NO_PRINT_2ND = 0x4000
    TWO_IO_THREADS = 0x8000
    LONG_CIGAR = 0x10000
    INDEPEND_SEG = 0x20000
    SPLICE_FLANK = 0x40000
    SOFTCLIP = 0x80000
    FOR_ONLY = 0x100000
    REV_ONLY = 0x200000
    HEAP_SORT = 0x400000
    ALL_CHAINS = 0x800000
    OUT_MD = 0x1000000
    COPY_COMMENT = 0x2000000
    EQX = 0x4000000
    PAF_NO_HIT = 0x8000000
    NO_END_FLT = 0x10000000
    HARD_MLEVEL = 0x20000000
    SAM_HIT_ONLY = 0x40000000
    RMQ = 0x80000000
    QSTRAND = 0x100000000
    NO_INV = 0x200000000
    NO_HASH_NAME = 0x400000000


class IndexFlag(enum.IntFlag):
    """Indexing option flags."""

    HPC = 0x1
    NO_SEQ = 0x2
    NO_NAME = 0x4
    SYNCMER = 0x8


class CigarOp(enum.IntEnum):
    """CIGAR operation codes; the code indexes into ``CIGAR_STR``."""

    MATCH = 0
    INS = 1
    DEL = 2
    N_SKIP = 3
    SOFTCLIP = 4
    HARDCLIP = 5
    PADDING = 6
    EQ_MATCH = 7
    X_MISMATCH = 8


class SeedFlag(enum.IntFlag):
    """Flag bits stored in the high part of a seed's 64-bit word."""

    LONG_JOIN = 1 << 40
    IGNORE = 1 << 41
    TANDEM = 1 << 42
    SELF = 1 << 43


class DebugFlag(enum.IntFlag):
    """Debugging switches."""

    NO_KALLOC = 0x1
    PRINT_QNAME = 0x2
    PRINT_SEED = 0x4
    PRINT_ALN_SEQ = 0x8
    PRINT_CHAIN = 0x10


@dataclass
class IndexSequence:
    """Name, length and packed-sequence offset of one reference sequence."""

    name: str
    offset: int = 0
    length: int = 0
    is_alt: bool = False


@dataclass
class IndexOptions:
    """Parameters used to build an index."""

    k: int
    w: int
    flag: IndexFlag
    bucket_bits: int
    mini_batch_size: int
    batch_size: int

    def __post_init__(self) -> None:
        self.flag = IndexFlag(self.flag)


def seq4_set(packed: MutableSequence[int], i: int, c: int) -> None:
    """OR the 4-bit code ``c`` into position ``i`` of a list of 32-bit words."""
    if not 0 <= c <= 0xF:
        raise ValueError("4-bit code out of range: %r" % c)
    if i < 0:
        raise IndexError("negative position %d" % i)
    packed[i >> 3] = (packed[i >> 3] | (c << ((i & 7) << 2))) & _U32


def seq4_get(packed: MutableSequence[int], i: int) -> int:
    """Return the 4-bit code at position ``i`` of a list of 32-bit words."""
    if i < 0:
        raise IndexError("negative position %d" % i)
    return (packed[i >> 3] >> ((i & 7) << 2)) & 0xF


def roundup32(x: int) -> int:
    """Round ``x`` up to the next power of two in 32-bit unsigned arithmetic."""
    if x < 0:
        raise ValueError("roundup32 needs a non-negative value")
    x = (x - 1) & _U32
    for shift in (1, 2, 4, 8, 16):
        x |= x >> shift
    return (x + 1) & _U32


def mg_log2(x: float) -> float:
    """Fast approximate base-2 logarithm in single precision; meant for ``x >= 2``."""
    (bits,) = struct.unpack("<I", struct.pack("<f", x))
    log_2 = float(((bits >> 23) & 255) - 128)
    bits &= ~(255 << 23) & _U32
    bits = (bits + (127 << 23)) & _U32
    (z,) = struct.unpack("<f", struct.pack("<I", bits))
    log_2 += (-0.34484843 * z + 2.02466578) * z - 0.67487759
    (result,) = struct.unpack("<f", struct.pack("<f", log_2))
    return result


def cigar_to_string(cigar: Iterable[int]) -> str:
    """Render BAM-encoded CIGAR words (``length << 4 | op``) as text."""
    parts = []
    for word in cigar:
        op = word & 0xF
        if op >= len(CIGAR_STR):
            raise ValueError("unknown CIGAR operation %d" % op)
        parts.append("%d%s" % (word >> 4, CIGAR_STR[op]))
    return "".join(parts)