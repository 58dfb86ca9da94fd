"""Selection, heap and radix-sort helpers."""

from __future__ import annotations

import operator
from typing import Any, Callable, List, MutableSequence, Optional

RS_MIN_SIZE = 64
RS_MAX_BITS = 8

Less = Callable[[Any, Any], bool]


def ksmall(values: MutableSequence[Any], k: int, less: Optional[Less] = None) -> Any:
    """Return the ``k``-th smallest element (0-based), partially reordering ``values`` in place."""
    lt = less or operator.lt
    a = values
    n = len(a)
    if not 0 <= k < n:
        raise IndexError("k=%d out of range for %d elements" % (k, n))
    low, high = 0, n - 1
    while True:
        if high <= low:
            return a[k]
        if high == low + 1:
            if lt(a[high], a[low]):
                a[low], a[high] = a[high], a[low]
            return a[k]
        mid = low + (high - low) // 2
        if lt(a[high], a[mid]):
            a[mid], a[high] = a[high], a[mid]
        if lt(a[high], a[low]):
            a[low], a[high] = a[high], a[low]
        if lt(a[low], a[mid]):
            a[mid], a[low] = a[low], a[mid]
        a[mid], a[low + 1] = a[low + 1], a[mid]
        ll, hh = low + 1, high
        while True:
            ll += 1
            while lt(a[ll], a[low]):
                ll += 1
            hh -= 1
            while lt(a[low], a[hh]):
                hh -= 1
            if hh < ll:
                break
            a[ll], a[hh] = a[hh], a[ll]
        a[low], a[hh] = a[hh], a[low]
        if hh <= k:
            low = ll
        if hh >= k:
            high = hh - 1


def heap_down(items: MutableSequence[Any], i: int, n: int, less: Optional[Less] = None) -> None:
    """Sift ``items[i]`` down within the first ``n`` elements of a max-heap."""
    lt = less or operator.lt
    tmp = items[i]
    k = i
    while True:
        k = 2 * k + 1
        if k >= n:
            break
        if k != n - 1 and lt(items[k], items[k + 1]):
            k += 1
        if lt(items[k], tmp):
            break
        items[i] = items[k]
        i = k
    items[i] = tmp


def heap_make(items: MutableSequence[Any], less: Optional[Less] = None) -> None:
    """Arrange ``items`` in place into a max-heap under ``less``."""
    n = len(items)
    for i in range(n // 2 - 1, -1, -1):
        heap_down(items, i, n, less)


def _rs_sort(items: List[Any], key: Callable[[Any], int], n_bits: int, shift: int) -> List[Any]:
    mask = (1 << n_bits) - 1
    buckets: List[List[Any]] = [[] for _ in range(1 << n_bits)]
    for x in items:
        buckets[(key(x) >> shift) & mask].append(x)
    if shift:
        next_shift = shift - n_bits if shift > n_bits else 0
        for idx, bucket in enumerate(buckets):
            if len(bucket) > RS_MIN_SIZE:
                buckets[idx] = _rs_sort(bucket, key, n_bits, next_shift)
            elif len(bucket) > 1:
                bucket.sort(key=key)
    return [x for bucket in buckets for x in bucket]


def radix_sort(items: List[Any], key: Optional[Callable[[Any], int]] = None,
               key_bytes: int = 8) -> None:
    """Sort ``items`` in place by an unsigned integer key of ``key_bytes`` bytes."""
    if key_bytes < 1:
        raise ValueError("key_bytes must be positive")
    getkey = key or (lambda x: x)
    if len(items) <= RS_MIN_SIZE:
        items.sort(key=getkey)
        return
    items[:] = _rs_sort(list(items), getkey, RS_MAX_BITS, (key_bytes - 1) * RS_MAX_BITS)