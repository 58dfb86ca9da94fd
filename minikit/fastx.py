"""Streaming reader for FASTA and FASTQ records, plain or gzip-compressed."""

from __future__ import annotations

import gzip
import re
import sys
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional, Tuple, Union

_BUFSIZE = 16384
_SPACE = re.compile(rb"[ \t\n\v\f\r]")
_NEWLINE = 0x0A
_CR = 0x0D
_FASTA_HEAD = 0x3E  # '>'
_FASTQ_HEAD = 0x40  # '@'
_PLUS = 0x2B  # '+'


class TruncatedQualityError(ValueError):
    """A FASTQ record has a missing quality line or one of the wrong length."""


@dataclass(frozen=True)
class FastxRecord:
    """One sequence record; ``qual`` is None for FASTA records."""

    name: str
    seq: str
    comment: str = ""
    qual: Optional[str] = None


def _strip_cr(buf: bytearray) -> None:
    if len(buf) > 1 and buf[-1] == _CR:
        del buf[-1]


class _ByteStream:
    """Buffered byte reader with single-byte and delimiter-based reads."""

    def __init__(self, fp) -> None:
        self._fp = fp
        self._buf = b""
        self._begin = 0
        self._eof = False

    def _fill(self) -> bool:
        if self._eof:
            return False
        data = self._fp.read(_BUFSIZE)
        if isinstance(data, str):
            data = data.encode("latin-1")
        self._buf = data or b""
        self._begin = 0
        if len(self._buf) < _BUFSIZE:
            self._eof = True
        return len(self._buf) > 0

    def getc(self) -> Optional[int]:
        if self._begin >= len(self._buf) and not self._fill():
            return None
        c = self._buf[self._begin]
        self._begin += 1
        return c

    def getuntil(self, by_space: bool) -> Optional[Tuple[bytes, Optional[int]]]:
        """Read up to a delimiter; return the bytes and the delimiter, or None at end of input."""
        pieces = []
        delimiter: Optional[int] = None
        first = True
        while True:
            if self._begin >= len(self._buf):
                if not self._fill():
                    if first:
                        return None
                    break
            first = False
            buf = self._buf
            if by_space:
                m = _SPACE.search(buf, self._begin)
                i = m.start() if m else -1
            else:
                i = buf.find(b"\n", self._begin)
            if i < 0:
                pieces.append(buf[self._begin:])
                self._begin = len(buf)
                continue
            pieces.append(buf[self._begin:i])
            delimiter = buf[i]
            self._begin = i + 1
            break
        return b"".join(pieces), delimiter


class FastxReader:
    """Read FASTA/FASTQ records one at a time from a binary or text stream."""

    def __init__(self, stream: Union[BinaryIO, object]) -> None:
        self._fp = stream
        self._stream = _ByteStream(stream)
        self._last = 0

    def read(self) -> Optional[FastxRecord]:
        """Return the next record, or None at end of input.

        Raises TruncatedQualityError if a FASTQ quality string is missing
        or differs in length from the sequence.
        """
        s = self._stream
        if not self._last:
            while True:
                c = s.getc()
                if c is None:
                    return None
                if c in (_FASTA_HEAD, _FASTQ_HEAD):
                    break
            self._last = c
        got = s.getuntil(by_space=True)
        if got is None:
            return None
        name, c = got
        comment = bytearray()
        if c != _NEWLINE:
            rest = s.getuntil(by_space=False)
            if rest is not None:
                comment += rest[0]
                _strip_cr(comment)

        seq = bytearray()
        while True:
            c = s.getc()
            if c is None or c in (_FASTA_HEAD, _PLUS, _FASTQ_HEAD):
                break
            if c == _NEWLINE:
                continue
            seq.append(c)
            rest = s.getuntil(by_space=False)
            if rest is not None:
                seq += rest[0]
                _strip_cr(seq)
        if c in (_FASTA_HEAD, _FASTQ_HEAD):
            self._last = c
        if c != _PLUS:
            return FastxRecord(name.decode("latin-1"), seq.decode("latin-1"),
                               comment.decode("latin-1"))

        while True:
            c = s.getc()
            if c is None:
                raise TruncatedQualityError("no quality string for %r" % name.decode("latin-1"))
            if c == _NEWLINE:
                break
        qual = bytearray()
        while len(qual) < len(seq):
            rest = s.getuntil(by_space=False)
            if rest is None:
                break
            qual += rest[0]
            _strip_cr(qual)
        self._last = 0
        if len(qual) != len(seq):
            raise TruncatedQualityError(
                "quality string of %r has length %d, sequence has %d"
                % (name.decode("latin-1"), len(qual), len(seq)))
        return FastxRecord(name.decode("latin-1"), seq.decode("latin-1"),
                           comment.decode("latin-1"), qual.decode("latin-1"))

    def __iter__(self) -> Iterator[FastxRecord]:
        while True:
            record = self.read()
            if record is None:
                return
            yield record

    def close(self) -> None:
        """Close the underlying stream."""
        self._fp.close()

    def __enter__(self) -> "FastxReader":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def open_fastx(path: Optional[str]) -> FastxReader:
    """Open a FASTA/FASTQ file, gzip-compressed or not; ``-`` or None reads standard input."""
    if path is None or path == "-":
        raw = open(sys.stdin.fileno(), "rb", closefd=False)
        if raw.peek(2)[:2] == b"\x1f\x8b":
            return FastxReader(gzip.GzipFile(fileobj=raw))
        return FastxReader(raw)
    raw = open(path, "rb")
    if raw.peek(2)[:2] == b"\x1f\x8b":
        raw.close()
        return FastxReader(gzip.open(path, "rb"))
    return FastxReader(raw)