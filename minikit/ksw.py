"""Alignment result bookkeeping, CIGAR assembly and DP backtracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from minikit.defs import CigarOp

NEG_INF = -0x40000000

EZ_SCORE_ONLY = 0x01
EZ_RIGHT = 0x02
EZ_GENERIC_SC = 0x04
EZ_APPROX_MAX = 0x08
EZ_APPROX_DROP = 0x10
EZ_EXTZ_ONLY = 0x40
EZ_REV_CIGAR = 0x80
EZ_SPLICE_FOR = 0x100
EZ_SPLICE_REV = 0x200
EZ_SPLICE_FLANK = 0x400


@dataclass
class ExtzResult:
    """Scores, extension coordinates and CIGAR of an extension alignment."""

    max: int = 0
    zdropped: bool = False
    max_q: int = -1
    max_t: int = -1
    mqe: int = NEG_INF
    mqe_t: int = -1
    mte: int = NEG_INF
    mte_q: int = -1
    score: int = NEG_INF
    reach_end: bool = False
    cigar: List[int] = field(default_factory=list)

    def reset(self) -> None:
        """Restore the initial state and drop the CIGAR."""
        self.max_q = self.max_t = self.mqe_t = self.mte_q = -1
        self.max = 0
        self.score = self.mqe = self.mte = NEG_INF
        self.cigar = []
        self.zdropped = False
        self.reach_end = False

    def apply_zdrop(self, is_rot: bool, h: int, a: int, b: int, zdrop: int, e: int) -> bool:
        """Track the best score and report whether the Z-drop condition is met.

        With ``is_rot`` the cell is given as (anti-diagonal, target position);
        otherwise as (target position, query position).
        """
        if is_rot:
            r, t = a, b
        else:
            r, t = a + b, a
        if h > self.max:
            self.max = h
            self.max_t = t
            self.max_q = r - t
        elif t >= self.max_t and r - t >= self.max_q:
            tl = t - self.max_t
            ql = (r - t) - self.max_q
            gap = abs(tl - ql)
            if zdrop >= 0 and self.max - h > zdrop + gap * e:
                self.zdropped = True
                return True
        return False


def push_cigar(cigar: List[int], op: int, length: int) -> List[int]:
    """Append ``length`` of ``op`` to BAM-encoded ``cigar``, merging with the last run."""
    if not cigar or op != (cigar[-1] & 0xF):
        cigar.append(length << 4 | op)
    else:
        cigar[-1] += length << 4
    return cigar


def backtrack(p: Sequence[int], off: Sequence[int], off_end: Optional[Sequence[int]],
              n_col: int, i0: int, j0: int, is_rot: bool = False, is_rev: bool = False,
              min_intron_len: int = 0) -> List[int]:
    """Trace a backtrack matrix from cell (``i0``, ``j0``) and return the CIGAR.

    Each byte of ``p`` holds the state giving the maximum in bits 0-2 and
    continuation flags for the gap states in bits 3-6. ``i`` runs along the
    target, ``j`` along the query. The CIGAR is returned in forward order
    unless ``is_rev`` is set.
    """
    cigar: List[int] = []
    i, j = i0, j0
    state = 0
    while i >= 0 and j >= 0:
        force_state = -1
        if is_rot:
            r = i + j
            if i < off[r]:
                force_state = 2
            if off_end is not None and i > off_end[r]:
                force_state = 1
            tmp = p[r * n_col + i - off[r]] if force_state < 0 else 0
        else:
            if j < off[i]:
                force_state = 2
            if off_end is not None and j > off_end[i]:
                force_state = 1
            tmp = p[i * n_col + j - off[i]] if force_state < 0 else 0
        if state == 0:
            state = tmp & 7
        elif not (tmp >> (state + 2)) & 1:
            state = 0
        if state == 0:
            state = tmp & 7
        if force_state >= 0:
            state = force_state
        if state == 0:
            push_cigar(cigar, CigarOp.MATCH, 1)
            i -= 1
            j -= 1
        elif state == 1 or (state == 3 and min_intron_len <= 0):
            push_cigar(cigar, CigarOp.DEL, 1)
            i -= 1
        elif state == 3:
            push_cigar(cigar, CigarOp.N_SKIP, 1)
            i -= 1
        else:
            push_cigar(cigar, CigarOp.INS, 1)
            j -= 1
    if i >= 0:
        op = CigarOp.N_SKIP if min_intron_len > 0 and i >= min_intron_len else CigarOp.DEL
        push_cigar(cigar, op, i + 1)
    if j >= 0:
        push_cigar(cigar, CigarOp.INS, j + 1)
    if not is_rev:
        cigar.reverse()
    return cigar