import pytest

from tskm.bitset import BitSet


def test_filled_sets_every_bit():
    bits = BitSet.filled(4, 1)
    assert list(bits) == [1, 1, 1, 1]
    assert bits.cardinality() == len(bits)


def test_filled_default_is_zero():
    assert BitSet.filled(3).cardinality() == 0


def test_values_are_normalised():
    assert list(BitSet([0, 2, True, 0])) == [0, 1, 1, 0]


def test_and_returns_new_bitset():
    a = BitSet([1, 1, 0, 1])
    b = BitSet([1, 0, 0, 1])
    assert a & b == BitSet([1, 0, 0, 1])
    assert a == BitSet([1, 1, 0, 1])


def test_iand_updates_in_place():
    a = BitSet([1, 1, 0, 1])
    alias = a
    a &= BitSet([0, 1, 1, 1])
    assert alias is a
    assert a == BitSet([0, 1, 0, 1])


def test_or_and_ior():
    a = BitSet([1, 0, 0])
    assert a | BitSet([0, 0, 1]) == BitSet([1, 0, 1])
    a |= BitSet([0, 1, 0])
    assert a == BitSet([1, 1, 0])


def test_shorter_right_operand_counts_as_zero():
    assert BitSet([1, 1, 1]) & BitSet([1]) == BitSet([1, 0, 0])
    assert BitSet([0, 0, 0]) | BitSet([0, 1]) == BitSet([0, 1, 0])


def test_longer_right_operand_keeps_left_length():
    assert len(BitSet([1, 1]) & BitSet([1, 1, 1, 1])) == 2


def test_less_than_is_positionwise():
    a = BitSet([0, 1])
    b = BitSet([1, 0])
    assert a < b
    assert b < a
    assert not a < BitSet([0, 1])


def test_equal_bitsets_share_hash():
    table = {BitSet([1, 0, 1]): "x"}
    assert table[BitSet([1, 0, 1])] == "x"
    assert BitSet([1, 0, 1]) != BitSet([1, 0, 0])


def test_str_lists_set_indices():
    assert str(BitSet([1, 0, 1])) == "0 2 "
    assert str(BitSet([0, 0])) == ""


def test_ones_and_cardinality_agree():
    bits = BitSet([0, 1, 1, 0, 1])
    assert bits.ones() == [1, 2, 4]
    assert bits.cardinality() == len(bits.ones())


def test_setitem_and_flip():
    bits = BitSet.filled(3)
    bits[1] = 5
    assert list(bits) == [0, 1, 0]
    bits.flip(1)
    bits.flip(2)
    assert list(bits) == [0, 0, 1]


def test_resize_grows_and_shrinks():
    bits = BitSet([1, 0])
    bits.resize(4, 1)
    assert list(bits) == [1, 0, 1, 1]
    bits.resize(1)
    assert list(bits) == [1]


def test_out_of_range_index_raises():
    with pytest.raises(IndexError):
        BitSet([1])[3]