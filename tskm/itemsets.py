"""Margin-closed itemset mining over a vertical (item -> transactions) layout."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable, Mapping, Sequence

from tskm.bitset import BitSet

_INITIAL_BITSET_SIZE = 64


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _set_key(itemset: Iterable[Hashable]) -> list:
    return sorted(itemset)


class ClosedItemset(ABC):
    """Common state and helpers of closed itemset miners.

    ``alpha`` is the margin: a closed set is kept only if no direct superset
    keeps at least ``1 - alpha`` of its support.
    """

    def __init__(self, min_support: int = 1, alpha: float = 0.0) -> None:
        self.min_support = min_support
        self.alpha = alpha
        self.support_length = 0
        self._result_itemsets: list[frozenset] = []
        self._result_bitsets: list[BitSet] = []

    @property
    def alpha(self) -> float:
        return self._alpha

    @alpha.setter
    def alpha(self, value: float) -> None:
        self._alpha = value
        self.beta = _f32(1.0 - _f32(value))

    def result(self) -> dict[frozenset, BitSet]:
        """Closed itemsets found so far, mapped to their transaction masks."""
        out: dict[frozenset, BitSet] = {}
        for itemset, bits in zip(self._result_itemsets, self._result_bitsets):
            out.setdefault(itemset, bits)
        return out

    def support_vector(self) -> list[int]:
        """Weight of each transaction position: always 1."""
        return [1] * self.support_length

    def support_map(self) -> dict[frozenset, int]:
        """Closed itemsets mapped to their support."""
        return {itemset: self.bitset_support(bits) for itemset, bits in self.result().items()}

    def add_result(self, closed_set: Iterable[Hashable], support: int, transactions: BitSet) -> None:
        self._result_itemsets.append(frozenset(closed_set))
        self._result_bitsets.append(BitSet(transactions))

    def is_margin(self, superset: int, subset: int) -> bool:
        """True if the superset keeps less than ``1 - alpha`` of the subset's support."""
        if subset == 0:
            return False
        return _f32(superset / subset) < self.beta

    def bitset_support(self, bits: BitSet) -> int:
        """Number of transactions set in ``bits``."""
        return bits.cardinality()

    @abstractmethod
    def item_transactions(self, item: Hashable) -> BitSet:
        """Transactions containing ``item``."""

    @abstractmethod
    def transactions(self, items: Sequence[Hashable]) -> BitSet:
        """Transactions containing every item of ``items``."""

    @abstractmethod
    def preprocessing(self, transactions: Mapping[frozenset, int]) -> None:
        """Load transactions (itemset -> multiplicity) into the internal layout."""

    @abstractmethod
    def run(self, transactions: Mapping[frozenset, int]) -> dict[frozenset, BitSet]:
        """Mine the closed itemsets of ``transactions``."""

    @abstractmethod
    def item_support(self, item: Hashable) -> int:
        """Support of a single item."""

    @abstractmethod
    def itemset_support(self, items: Iterable[Hashable]) -> int:
        """Support of an itemset."""


class VerticalClosedItemset(ClosedItemset):
    """Closed itemset miner keeping one transaction mask per item."""

    def __init__(self, min_support: int = 1, alpha: float = 0.0) -> None:
        super().__init__(min_support, alpha)
        self.items: dict[Hashable, BitSet] = {}

    def item_transactions(self, item: Hashable) -> BitSet:
        return BitSet(self.items.get(item, BitSet()))

    def transactions(self, items: Sequence[Hashable]) -> BitSet:
        items = list(items)
        if items:
            bits = self.item_transactions(items[0])
        else:
            bits = BitSet.filled(self.support_length, 1)
        for item in items:
            bits &= self.items.get(item, BitSet())
        return bits

    def is_subset(self, a: BitSet, b: BitSet) -> bool:
        """True if every transaction set in ``a`` is also set in ``b``."""
        return all(b[index] if index < len(b) else False for index in a.ones())

    def preprocessing(self, transactions: Mapping[frozenset, int]) -> None:
        total = sum(transactions.values())
        size = max(_INITIAL_BITSET_SIZE, total)
        self.support_length = 0
        counter = 0
        for itemset, count in sorted(transactions.items(), key=lambda entry: _set_key(entry[0])):
            for _ in range(count):
                for item in sorted(itemset):
                    bits = self.items.get(item)
                    if bits is None:
                        bits = self.items[item] = BitSet.filled(size, 0)
                    bits[counter] = 1
                counter += 1
        self.remove_infrequent()
        self.support_length = counter

    def remove_infrequent(self) -> None:
        """Drop the items whose support is below the minimal support."""
        infrequent = [item for item in self.items if self.item_support(item) < self.min_support]
        for item in infrequent:
            del self.items[item]

    def sort_by_supports(self, items: Iterable[Hashable]) -> list:
        """Items ordered by ascending support, ties in item order."""
        return sorted(sorted(items), key=self.item_support)

    def item_support(self, item: Hashable) -> int:
        return self.item_transactions(item).cardinality()

    def itemset_support(self, items: Iterable[Hashable]) -> int:
        ordered = sorted(items)
        if not ordered:
            return self.support_length
        return self.bitset_support(self.transactions(ordered))


class MarginDCIClosedIntersection(VerticalClosedItemset):
    """DCI-Closed with a margin test by intersection with single items."""

    def __init__(self, min_support: int = 1, alpha: float = 0.0) -> None:
        super().__init__(min_support, alpha)
        self.sorted_by_support: list = []
        self._support_per_item: list[int] = []

    def run(self, transactions: Mapping[frozenset, int]) -> dict[frozenset, BitSet]:
        self.preprocessing(transactions)
        bottom = self.bottom_closure()
        post_set = set(self.items) - set(bottom)
        self.sorted_by_support = self.sort_by_supports(post_set)
        self._support_per_item = [self.item_support(item) for item in self.sorted_by_support]

        bottom_support = self.support_length
        if bottom_support >= self.min_support:
            self.test_margin(set(bottom), self.transactions(bottom), bottom_support)
        self.dci_closed(bottom, [], list(self.sorted_by_support), self.transactions(bottom), bottom_support)
        return self.result()

    def dci_closed(
        self,
        closed_set: Sequence[Hashable],
        pre_set: Sequence[Hashable],
        post_set: Sequence[Hashable],
        old_bits: BitSet,
        last_support: int,
    ) -> bool:
        """Extend ``closed_set`` by the items of ``post_set``; True if all extensions lose the margin."""
        pre = list(pre_set)
        post = list(post_set)
        was_margin = True
        last_supp = _f32(last_support * self.beta)
        while post:
            item = post.pop(0)
            new_gen = [*closed_set, item]
            new_bits = old_bits & self.items.get(item, BitSet())
            support = self.bitset_support(new_bits)
            if support >= self.min_support and not self.is_duplicate(new_bits, pre):
                was_margin = was_margin and support < last_supp
                closed_new = list(new_gen)
                post_new = []
                for candidate in post:
                    if self.is_subset(new_bits, self.item_transactions(candidate)):
                        closed_new.append(candidate)
                    else:
                        post_new.append(candidate)
                if self.dci_closed(closed_new, list(pre), post_new, new_bits, support):
                    self.test_margin(set(closed_new), new_bits, support)
                pre.append(item)
        return was_margin

    def test_margin(self, closed_set: Iterable[Hashable], closed_transactions: BitSet, closed_support: int) -> None:
        """Add ``closed_set`` unless a direct superset keeps enough of its support."""
        closed = set(closed_set)
        if self.beta != 1:
            closed_supp = _f32(closed_support * self.beta)
            supports = reversed(self._support_per_item)
            for item in reversed(self.sorted_by_support):
                if item in closed:
                    continue
                if next(supports) < closed_supp:
                    break
                support = self.bitset_support(self.item_transactions(item) & closed_transactions)
                if support >= self.min_support and support >= closed_supp:
                    return
        self.add_result(closed, closed_support, closed_transactions)

    def bottom_closure(self) -> list:
        """Items present in every transaction."""
        return [item for item in sorted(self.items) if self.items[item].cardinality() == self.support_length]

    def is_duplicate(self, bits: BitSet, pre_set: Iterable[Hashable]) -> bool:
        """True if an item of ``pre_set`` occurs in every transaction of ``bits``."""
        return any(self.is_subset(bits, self.item_transactions(item)) for item in pre_set)