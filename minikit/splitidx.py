"""Temporary per-part files recording sequence names and lengths of a split index."""

from __future__ import annotations

import contextlib
import os
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, List, Tuple

from minikit.defs import IndexSequence

_U32 = struct.Struct("<I")


class SplitIndexError(OSError):
    """A temporary split-index file could not be written, opened or read."""


@dataclass
class IndexPart:
    """One part of an index: its number, k-mer size and reference sequences."""

    index: int = 0
    k: int = 0
    sequences: List[IndexSequence] = field(default_factory=list)


def split_path(prefix: str, part: int) -> str:
    """Return the name of the temporary file for index part ``part``."""
    sign = "-" if part < 0 else ""
    return "%s.%s%04d.tmp" % (prefix, sign, abs(part))


def split_init(prefix: str, part: IndexPart) -> BinaryIO:
    """Create the temporary file for ``part`` and write its header.

    The file is returned open for writing, positioned after the header.
    """
    path = split_path(prefix, part.index)
    try:
        fp = open(path, "wb")
    except OSError as exc:
        raise SplitIndexError("failed to write to temporary file '%s': %s"
                              % (path, exc.strerror)) from exc
    try:
        fp.write(_U32.pack(part.k))
        fp.write(_U32.pack(len(part.sequences)))
        for seq in part.sequences:
            name = seq.name.encode("utf-8")
            fp.write(_U32.pack(len(name)))
            fp.write(name)
            fp.write(_U32.pack(seq.length))
    except Exception:
        fp.close()
        raise
    return fp


def _read_exact(fp: BinaryIO, n: int) -> bytes:
    data = fp.read(n)
    if len(data) != n:
        raise SplitIndexError("unexpected end of temporary file '%s'" % getattr(fp, "name", "?"))
    return data


def _read_u32(fp: BinaryIO) -> int:
    (value,) = _U32.unpack(_read_exact(fp, 4))
    return value


def split_merge_prep(prefix: str, n_splits: int) -> Tuple[IndexPart, List[BinaryIO], List[int]]:
    """Open all temporary files and read their headers.

    Returns the combined index part (all sequences in part order), the open
    files positioned after their headers, and the number of sequences in
    each part. The caller closes the files.
    """
    if n_splits < 1:
        raise ValueError("n_splits must be at least 1")
    files: List[BinaryIO] = []
    for i in range(n_splits):
        path = split_path(prefix, i)
        try:
            files.append(open(path, "rb"))
        except OSError as exc:
            for fp in files:
                fp.close()
            raise SplitIndexError("failed to open temporary file '%s': %s"
                                  % (path, exc.strerror)) from exc
    try:
        merged = IndexPart()
        counts: List[int] = []
        for fp in files:
            merged.k = _read_u32(fp)
            counts.append(_read_u32(fp))
        for fp, count in zip(files, counts):
            for _ in range(count):
                name_len = _read_u32(fp)
                name = _read_exact(fp, name_len).decode("utf-8")
                length = _read_u32(fp)
                merged.sequences.append(IndexSequence(name=name, length=length))
    except Exception:
        for fp in files:
            fp.close()
        raise
    return merged, files, counts


def split_rm_tmp(prefix: str, n_splits: int) -> None:
    """Remove the temporary files of parts ``0 .. n_splits-1``, ignoring failures."""
    for i in range(n_splits):
        with contextlib.suppress(OSError):
            os.remove(split_path(prefix, i))