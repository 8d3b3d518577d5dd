import pytest

from progkit.intset import IntSet


def test_example_one():
    x, y = IntSet(), IntSet()
    x.add(1)
    x.add(144)
    x.add(9)
    assert str(x) == "{1 9 144}"

    y.add(9)
    y.add(42)
    assert str(y) == "{9 42}"

    x.union_with(y)
    assert str(x) == "{1 9 42 144}"

    assert (x.has(9), x.has(123)) == (True, False)


def test_example_two():
    x = IntSet()
    for value in (1, 144, 9, 42):
        x.add(value)
    assert str(x) == "{1 9 42 144}"
    assert x.words == (4398046511618, 0, 65536)


def test_empty_set():
    s = IntSet()
    assert str(s) == "{}"
    assert not s.has(0)
    assert s.words == ()


def test_contains_operator():
    s = IntSet([0, 63, 64])
    assert 63 in s
    assert 64 in s
    assert 65 not in s


def test_union_with_shorter_set_keeps_high_words():
    big = IntSet([200])
    small = IntSet([3])
    big.union_with(small)
    assert str(big) == "{3 200}"
    assert len(big.words) == 4


def test_repr_lists_elements():
    assert repr(IntSet([9, 1])) == "IntSet([1, 9])"


def test_adding_twice_is_idempotent():
    s = IntSet([5])
    before = s.words
    s.add(5)
    assert s.words == before


def test_negative_values_rejected():
    s = IntSet()
    with pytest.raises(ValueError):
        s.add(-1)
    with pytest.raises(ValueError):
        s.has(-1)