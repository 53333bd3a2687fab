import pytest

from tskm.bitset import BitSet
from tskm.itemsets import ClosedItemset, MarginDCIClosedIntersection, VerticalClosedItemset

DATA = {frozenset({1, 2}): 2, frozenset({2, 3}): 1}
TOTAL = sum(DATA.values())


def prepared(min_support=1, alpha=0.0):
    miner = MarginDCIClosedIntersection(min_support, alpha)
    miner.preprocessing(DATA)
    return miner


def test_abstract_classes_cannot_be_instantiated():
    with pytest.raises(TypeError):
        ClosedItemset(1, 0.0)
    with pytest.raises(TypeError):
        VerticalClosedItemset(1, 0.0)


def test_is_margin():
    miner = MarginDCIClosedIntersection(1, 0.5)
    assert miner.is_margin(1, 4) is True
    assert miner.is_margin(3, 4) is False
    assert miner.is_margin(1, 0) is False


def test_bitset_support_counts_ones():
    miner = MarginDCIClosedIntersection()
    bits = BitSet([1, 0, 1, 1])
    assert miner.bitset_support(bits) == len(bits.ones())


def test_add_result_keeps_first_duplicate():
    miner = MarginDCIClosedIntersection()
    first = BitSet([1, 0])
    miner.add_result({5}, 1, first)
    miner.add_result({5}, 2, BitSet([1, 1]))
    assert miner.result() == {frozenset({5}): first}
    assert miner.support_map() == {frozenset({5}): first.cardinality()}


def test_preprocessing_builds_vertical_layout():
    miner = prepared()
    assert miner.support_length == TOTAL
    assert miner.support_vector() == [1] * TOTAL
    assert miner.item_support(2) == TOTAL
    assert miner.item_support(1) == DATA[frozenset({1, 2})]
    assert miner.item_support(3) == DATA[frozenset({2, 3})]


def test_transactions_of_itemsets():
    miner = prepared()
    assert miner.transactions([]) == BitSet.filled(TOTAL, 1)
    assert miner.transactions([1, 3]).cardinality() == 0
    assert miner.transactions([1, 2]).cardinality() == DATA[frozenset({1, 2})]


def test_itemset_support():
    miner = prepared()
    assert miner.itemset_support(frozenset()) == TOTAL
    assert miner.itemset_support(frozenset({1, 2})) == DATA[frozenset({1, 2})]
    assert miner.itemset_support(frozenset({2, 3})) == DATA[frozenset({2, 3})]


def test_item_transactions_returns_copy():
    miner = prepared()
    bits = miner.item_transactions(1)
    bits.flip(bits.ones()[0])
    assert miner.item_support(1) == DATA[frozenset({1, 2})]
    assert len(miner.item_transactions("missing")) == 0


def test_remove_infrequent_drops_rare_items():
    miner = prepared(min_support=2)
    assert set(miner.items) == {1, 2}


def test_sort_by_supports_orders_ascending():
    miner = prepared()
    ordered = miner.sort_by_supports({1, 2, 3})
    assert ordered == [3, 1, 2]
    supports = [miner.item_support(item) for item in ordered]
    assert supports == sorted(supports)


def test_is_subset():
    miner = MarginDCIClosedIntersection()
    assert miner.is_subset(BitSet([1, 0]), BitSet([1, 1])) is True
    assert miner.is_subset(BitSet([1, 1]), BitSet([1, 0])) is False
    assert miner.is_subset(BitSet([0, 0]), BitSet([0, 0])) is True


def test_bottom_closure_and_duplicates():
    miner = prepared()
    assert miner.bottom_closure() == [2]
    assert miner.is_duplicate(miner.item_transactions(1), [2]) is True
    assert miner.is_duplicate(miner.item_transactions(1), [3]) is False


def test_run_without_margin_finds_all_closed_sets():
    miner = MarginDCIClosedIntersection(1, 0.0)
    result = miner.run(DATA)
    assert set(result) == {frozenset({2}), frozenset({1, 2}), frozenset({2, 3})}
    assert miner.support_map() == {
        frozenset({2}): TOTAL,
        frozenset({1, 2}): DATA[frozenset({1, 2})],
        frozenset({2, 3}): DATA[frozenset({2, 3})],
    }


def test_run_with_margin_drops_non_margin_closed_set():
    miner = MarginDCIClosedIntersection(1, 0.5)
    result = miner.run(DATA)
    assert set(result) == {frozenset({1, 2}), frozenset({2, 3})}


def test_run_respects_minimal_support():
    miner = MarginDCIClosedIntersection(2, 0.0)
    result = miner.run(DATA)
    assert set(result) == {frozenset({2}), frozenset({1, 2})}
    assert all(support >= 2 for support in miner.support_map().values())