import pytest
from hypothesis import given, strategies as st

from minikit.krmq import RmqTree


def _pair_tree():
    return RmqTree(key=lambda t: t[0], value=lambda t: t[1])


pairs = st.lists(
    st.tuples(st.integers(-50, 50), st.integers(-1000, 1000)), max_size=80
)


def _model(items):
    model = {}
    for k, v in items:
        model.setdefault(k, (k, v))
    return model


def test_source_example_string():
    text = "MNOLKQOPHIA"
    tree = RmqTree()
    for ch in text:
        tree.insert(ch)
    assert "".join(tree) == "".join(sorted(set(text)))
    assert len(tree) == len(set(text))


def test_duplicate_insert_keeps_existing():
    tree = _pair_tree()
    first, _ = tree.insert((5, 1))
    stored, count = tree.insert((5, 99))
    assert stored == (5, 1)
    assert first == (5, 1)
    assert count == 1
    assert len(tree) == 1


@given(pairs)
def test_iteration_matches_model(items):
    tree = _pair_tree()
    for it in items:
        tree.insert(it)
    model = _model(items)
    expected = [model[k] for k in sorted(model)]
    assert list(tree) == expected
    assert list(reversed(tree)) == expected[::-1]
    assert len(tree) == len(model)


@given(pairs, st.integers(-60, 60))
def test_find_and_count(items, probe):
    tree = _pair_tree()
    for it in items:
        tree.insert(it)
    model = _model(items)
    found, count = tree.find(probe)
    assert found == model.get(probe)
    assert count == sum(1 for k in model if k <= probe)


@given(pairs)
def test_insert_count_is_rank_before_insert(items):
    tree = _pair_tree()
    seen = {}
    for k, v in items:
        _, count = tree.insert((k, v))
        assert count == sum(1 for x in seen if x <= k)
        seen.setdefault(k, v)


@given(pairs, st.integers(-60, 60), st.integers(-60, 60))
def test_rmq_matches_brute_force(items, a, b):
    tree = _pair_tree()
    for it in items:
        tree.insert(it)
    model = _model(items)
    lo, hi = min(a, b), max(a, b)
    in_range = [model[k] for k in model if lo <= k <= hi]
    result = tree.rmq(lo, hi)
    if not in_range:
        assert result is None
    else:
        assert lo <= result[0] <= hi
        assert result[1] == min(v for _, v in in_range)


def test_rmq_reversed_range_and_empty():
    tree = _pair_tree()
    assert tree.rmq(0, 10) is None
    for k in range(10):
        tree.insert((k, -k))
    assert tree.rmq(7, 3) is None
    assert tree.rmq(0, 9) == (9, -9)
    assert tree.rmq(2, 4) == (4, -4)


@given(pairs, st.lists(st.integers(-60, 60), max_size=40))
def test_erase_matches_model(items, removals):
    tree = _pair_tree()
    for it in items:
        tree.insert(it)
    model = _model(items)
    for k in removals:
        removed, count = tree.erase(k)
        if k in model:
            assert removed == model[k]
            assert count == sum(1 for x in model if x <= k)
            del model[k]
        else:
            assert removed is None
            assert count == 0
        assert list(tree) == [model[x] for x in sorted(model)]
    lo, hi = -60, 60
    if model:
        assert tree.rmq(lo, hi)[1] == min(v for _, v in model.values())
    else:
        assert tree.rmq(lo, hi) is None


@given(st.lists(st.integers(-100, 100), max_size=60))
def test_erase_first_drains_in_order(values):
    tree = RmqTree()
    for v in values:
        tree.insert(v)
    drained = [tree.erase_first() for _ in range(len(tree))]
    assert drained == sorted(set(values))
    assert len(tree) == 0


def test_erase_first_empty_raises():
    with pytest.raises(IndexError):
        RmqTree().erase_first()


def test_interval_neighbours():
    tree = RmqTree()
    for v in (10, 20, 30):
        tree.insert(v)
    assert tree.interval(20) == (20, 20)
    assert tree.interval(25) == (20, 30)
    assert tree.interval(5) == (None, 10)
    assert tree.interval(35) == (30, None)


@given(st.lists(st.integers(-100, 100), max_size=60), st.integers(-110, 110))
def test_iter_from(values, start):
    tree = RmqTree()
    for v in values:
        tree.insert(v)
    assert list(tree.iter_from(start)) == [v for v in sorted(set(values)) if v >= start]


def test_large_sequential_inserts_stay_consistent():
    tree = _pair_tree()
    for k in range(2000):
        tree.insert((k, (k * 7919) % 2003))
    assert len(tree) == 2000
    assert list(tree) == [(k, (k * 7919) % 2003) for k in range(2000)]
    for k in range(0, 2000, 2):
        tree.erase(k)
    assert len(tree) == 1000
    assert [k for k, _ in tree] == list(range(1, 2000, 2))
    result = tree.rmq(100, 300)
    expected = min((k * 7919) % 2003 for k in range(101, 300, 2))
    assert result[1] == expected