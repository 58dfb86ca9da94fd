"""Ordered AVL tree that answers range-minimum queries over its items."""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional, Tuple


def _identity(x: Any) -> Any:
    return x


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class _Node:
    __slots__ = ("item", "k", "v", "left", "right", "height", "size", "smin")

    def __init__(self, item: Any, k: Any, v: Any) -> None:
        self.item = item
        self.k = k
        self.v = v
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None
        self.height = 1
        self.size = 1
        self.smin: _Node = self


def _height(n: Optional[_Node]) -> int:
    return n.height if n is not None else 0


def _size(n: Optional[_Node]) -> int:
    return n.size if n is not None else 0


def _update(n: _Node) -> None:
    left, right = n.left, n.right
    n.height = 1 + max(_height(left), _height(right))
    n.size = 1 + _size(left) + _size(right)
    smin = n if left is None or n.v < left.smin.v else left.smin
    if right is not None and not smin.v < right.smin.v:
        smin = right.smin
    n.smin = smin


def _rotate_left(n: _Node) -> _Node:
    r = n.right
    assert r is not None
    n.right = r.left
    r.left = n
    _update(n)
    _update(r)
    return r


def _rotate_right(n: _Node) -> _Node:
    l = n.left
    assert l is not None
    n.left = l.right
    l.right = n
    _update(n)
    _update(l)
    return l


def _rebalance(n: _Node) -> _Node:
    _update(n)
    balance = _height(n.left) - _height(n.right)
    if balance > 1:
        assert n.left is not None
        if _height(n.left.left) < _height(n.left.right):
            n.left = _rotate_left(n.left)
        return _rotate_right(n)
    if balance < -1:
        assert n.right is not None
        if _height(n.right.right) < _height(n.right.left):
            n.right = _rotate_right(n.right)
        return _rotate_left(n)
    return n


class RmqTree:
    """Balanced binary search tree ordered by ``key(item)``.

    Every subtree remembers the item with the smallest ``value(item)``, so
    the minimum over a closed key range is found in logarithmic time.
    Keys are unique: inserting an item whose key is present keeps the old one.
    """

    def __init__(self, key: Optional[Callable[[Any], Any]] = None,
                 value: Optional[Callable[[Any], Any]] = None) -> None:
        self._key = key if key is not None else _identity
        self._value = value if value is not None else _identity
        self._root: Optional[_Node] = None

    def __len__(self) -> int:
        return _size(self._root)

    def _locate(self, k: Any) -> Tuple[Optional[_Node], int]:
        p = self._root
        count = 0
        while p is not None:
            c = _cmp(k, p.k)
            if c >= 0:
                count += _size(p.left) + 1
            if c < 0:
                p = p.left
            elif c > 0:
                p = p.right
            else:
                break
        return p, count

    def insert(self, item: Any) -> Tuple[Any, int]:
        """Insert ``item`` unless its key is present.

        Returns the stored item (the new one, or the one already holding the
        key) and the number of items, before insertion, whose key is not
        greater than the item's key.
        """
        k = self._key(item)
        existing, count = self._locate(k)
        if existing is not None:
            return existing.item, count
        self._root = self._insert(self._root, _Node(item, k, self._value(item)))
        return item, count

    def _insert(self, n: Optional[_Node], new: _Node) -> _Node:
        if n is None:
            return new
        if new.k < n.k:
            n.left = self._insert(n.left, new)
        else:
            n.right = self._insert(n.right, new)
        return _rebalance(n)

    def find(self, key: Any) -> Tuple[Optional[Any], int]:
        """Return the item with ``key`` (or None) and the count of items with key <= ``key``."""
        node, count = self._locate(key)
        return (node.item if node is not None else None), count

    def interval(self, key: Any) -> Tuple[Optional[Any], Optional[Any]]:
        """Return the nearest items below and above ``key``; both are the match if present."""
        p = self._root
        lower: Optional[_Node] = None
        upper: Optional[_Node] = None
        while p is not None:
            c = _cmp(key, p.k)
            if c < 0:
                upper, p = p, p.left
            elif c > 0:
                lower, p = p, p.right
            else:
                lower = upper = p
                break
        return (lower.item if lower is not None else None,
                upper.item if upper is not None else None)

    def _path(self, k: Any) -> list:
        path = []
        p = self._root
        while p is not None:
            c = _cmp(k, p.k)
            path.append((p, c))
            if c < 0:
                p = p.left
            elif c > 0:
                p = p.right
            else:
                break
        return path

    def rmq(self, lo: Any, hi: Any) -> Optional[Any]:
        """Return the item of smallest value whose key lies in the closed range [lo, hi]."""
        if self._root is None:
            return None
        lo_path = self._path(lo)
        hi_path = self._path(hi)
        lca = None
        for i, ((pl, cl), (ph, ch)) in enumerate(zip(lo_path, hi_path)):
            if pl is ph and cl <= 0 and ch >= 0:
                lca = i
                break
        if lca is None:
            return None
        best = lo_path[lca][0]
        for node, c in lo_path[lca + 1:]:
            if c <= 0:
                if node.v < best.v:
                    best = node
                if node.right is not None and node.right.smin.v < best.v:
                    best = node.right.smin
        for node, c in hi_path[lca + 1:]:
            if c >= 0:
                if node.v < best.v:
                    best = node
                if node.left is not None and node.left.smin.v < best.v:
                    best = node.left.smin
        return best.item

    def erase(self, key: Any) -> Tuple[Optional[Any], int]:
        """Remove the item with ``key``.

        Returns the removed item and the number of items with key <= ``key``
        before removal, or ``(None, 0)`` if the key is absent.
        """
        node, count = self._locate(key)
        if node is None:
            return None, 0
        self._root = self._delete(self._root, key)
        return node.item, count

    def _delete(self, n: Optional[_Node], k: Any) -> Optional[_Node]:
        assert n is not None
        c = _cmp(k, n.k)
        if c < 0:
            n.left = self._delete(n.left, k)
        elif c > 0:
            n.right = self._delete(n.right, k)
        else:
            if n.left is None:
                return n.right
            if n.right is None:
                return n.left
            new_right, successor = self._pop_min(n.right)
            successor.left = n.left
            successor.right = new_right
            n = successor
        return _rebalance(n)

    def _pop_min(self, n: _Node) -> Tuple[Optional[_Node], _Node]:
        if n.left is None:
            return n.right, n
        n.left, smallest = self._pop_min(n.left)
        return _rebalance(n), smallest

    def erase_first(self) -> Any:
        """Remove and return the item with the smallest key."""
        if self._root is None:
            raise IndexError("erase_first from an empty tree")
        self._root, smallest = self._pop_min(self._root)
        return smallest.item

    def _walk(self, stack: list, forward: bool) -> Iterator[Any]:
        while stack:
            node = stack.pop()
            yield node.item
            p = node.right if forward else node.left
            while p is not None:
                stack.append(p)
                p = p.left if forward else p.right

    def __iter__(self) -> Iterator[Any]:
        stack = []
        p = self._root
        while p is not None:
            stack.append(p)
            p = p.left
        return self._walk(stack, True)

    def __reversed__(self) -> Iterator[Any]:
        stack = []
        p = self._root
        while p is not None:
            stack.append(p)
            p = p.right
        return self._walk(stack, False)

    def iter_from(self, key: Any) -> Iterator[Any]:
        """Iterate in key order over items whose key is not less than ``key``."""
        stack = []
        p = self._root
        while p is not None:
            if key <= p.k:
                stack.append(p)
                p = p.left
            else:
                p = p.right
        return self._walk(stack, True)