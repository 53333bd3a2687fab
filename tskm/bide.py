"""Closed sequential pattern mining (BIDE) over sequences of itemsets."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import Any

SequenceKey = tuple[frozenset, ...]
ProjectedDB = dict[SequenceKey, int]


def _key(sequence: Iterable[Iterable[Hashable]]) -> SequenceKey:
    return tuple(frozenset(itemset) for itemset in sequence)


def _sort_key(sequence: SequenceKey) -> tuple[tuple[Any, ...], ...]:
    return tuple(tuple(sorted(itemset)) for itemset in sequence)


def _ordered(db: Mapping[SequenceKey, int]) -> list[tuple[SequenceKey, int]]:
    return sorted(db.items(), key=lambda entry: _sort_key(entry[0]))


class ClosedPseudoSequence:
    """Shared state of closed sequential pattern miners on pseudo-projected databases.

    A database maps each distinct sequence (a tuple of frozensets) to a
    pointer: the index where its unprocessed suffix starts.
    """

    def __init__(self, min_support: int = 1) -> None:
        self.min_support = min_support
        self.frequent_items: set = set()
        self.sequences: ProjectedDB = {}
        self.supports: dict[SequenceKey, int] = {}
        self.closed_sequences: set[tuple] = set()

    def frequent_1_sequences(self) -> set:
        """Items frequent on their own, computed once unless set beforehand.

        The first sequence holding an item counts once; each later sequence
        adds its multiplicity.
        """
        if not self.frequent_items:
            candidates: dict[Hashable, int] = {}
            for sequence, _ in _ordered(self.sequences):
                added: set = set()
                for itemset in sequence:
                    for item in sorted(itemset):
                        if item in added or item in self.frequent_items:
                            continue
                        if item in candidates:
                            candidates[item] += self.supports.get(sequence, 0)
                            if candidates[item] >= self.min_support:
                                self.frequent_items.add(item)
                        else:
                            candidates[item] = 1
                        added.add(item)
        return set(self.frequent_items)

    def preprocessing(self, sequences: Iterable[Iterable[Iterable[Hashable]]]) -> None:
        """Count the multiplicity of each distinct input sequence."""
        for raw in sequences:
            sequence = _key(raw)
            if sequence in self.supports:
                self.supports[sequence] += 1
            else:
                self.sequences[sequence] = 0
                self.supports[sequence] = 1

    def support(self, db: Mapping[SequenceKey, int]) -> int:
        """Total multiplicity of the sequences in ``db``."""
        return sum(self.supports.get(sequence, 0) for sequence in db)

    def is_subsequence(self, s1: Sequence[Hashable], s2: Sequence[Iterable[Hashable]]) -> bool:
        """True if the items of ``s1`` occur in order in successive itemsets of ``s2``."""
        remaining = iter(s1)
        target = next(remaining, _MISSING)
        if target is _MISSING:
            return True
        for itemset in s2:
            if target in itemset:
                target = next(remaining, _MISSING)
                if target is _MISSING:
                    return True
        return False

    def is_single_subsequence(self, s1: Sequence[Hashable], s2: Sequence[Hashable]) -> bool:
        """True if the items of ``s1`` occur in order in ``s2``."""
        remaining = iter(s1)
        target = next(remaining, _MISSING)
        if target is _MISSING:
            return True
        for item in s2:
            if target == item:
                target = next(remaining, _MISSING)
                if target is _MISSING:
                    return True
        return False

    def is_subset(self, item: Hashable, itemset: Iterable[Hashable]) -> bool:
        return item in itemset

    def local_frequent_items(self, db: Mapping[SequenceKey, int]) -> dict:
        """Items of the unprocessed suffixes reaching the minimal support, with that support."""
        candidates: dict[Hashable, int] = {}
        for sequence, pointer in _ordered(db):
            weight = self.supports.get(sequence, 0)
            added: set = set()
            for itemset in sequence[pointer:]:
                for item in itemset:
                    if item not in added:
                        candidates[item] = candidates.get(item, 0) + weight
                        added.add(item)
        return {
            item: support
            for item, support in sorted(candidates.items(), key=lambda entry: entry[0])
            if support >= self.min_support
        }

    def projected_db(self, item: Hashable, db: Mapping[SequenceKey, int]) -> ProjectedDB:
        """Sequences whose suffix holds ``item``, pointing just past its first occurrence."""
        out: ProjectedDB = {}
        for sequence, pointer in _ordered(db):
            for index, itemset in enumerate(sequence[pointer:], start=pointer + 1):
                if self.is_subset(item, itemset):
                    out[sequence] = index
                    break
        return out


_MISSING = object()


class PseudoBide(ClosedPseudoSequence):
    """BIDE for sequences of single items drawn from itemsets."""

    def run(self, sequences: Iterable[Iterable[Iterable[Hashable]]]) -> set[tuple]:
        """Mine the closed sequential patterns of ``sequences``."""
        self.preprocessing(sequences)
        self.bide()
        return self.closed_sequences

    def bide(self) -> set[tuple]:
        """Start the search from every frequent single item."""
        for item in sorted(self.frequent_1_sequences()):
            db = self.projected_db(item, self.sequences)
            if self.support(db) < self.min_support:
                continue
            prefix = [item]
            if self.back_scan(prefix, db):
                self._extend(db, prefix)
        return self.closed_sequences

    def _extend(self, db: ProjectedDB, prefix: list) -> None:
        local = self.local_frequent_items(db)
        if not self.frequent_extension_items(local, self.support(db)):
            if self.backward_closedness_check(prefix, db):
                self.closed_sequences.add(tuple(prefix))
        for item in local:
            extended = [*prefix, item]
            extended_db = self.projected_db(item, db)
            if self.support(extended_db) < self.min_support:
                continue
            if self.back_scan(extended, extended_db):
                self._extend(extended_db, extended)

    def frequent_extension_items(self, freq: Mapping[Hashable, int], current_support: int) -> bool:
        """True if some item extends every sequence of the current database."""
        return any(support == current_support for support in freq.values())

    def back_scan(self, prefix: Sequence[Hashable], db: Mapping[SequenceKey, int]) -> bool:
        """False if the prefix can be pruned: an item is common to one of its periods everywhere."""
        if not db:
            return False
        borders = {
            sequence: self.period_borders(prefix, sequence[:pointer]) for sequence, pointer in db.items()
        }
        return self._no_common_period_item(db, borders)

    def backward_closedness_check(self, prefix: Sequence[Hashable], db: Mapping[SequenceKey, int]) -> bool:
        """True if no item can be inserted into the prefix in every sequence."""
        if not db:
            return False
        borders = {sequence: self.period_borders(prefix, sequence) for sequence in db}
        return self._no_common_period_item(db, borders)

    def _no_common_period_item(
        self,
        db: Mapping[SequenceKey, int],
        borders: Mapping[SequenceKey, list[tuple[int, int]]],
    ) -> bool:
        sequences = [sequence for sequence, _ in _ordered(db)]
        for position_borders in zip(*(borders[sequence] for sequence in sequences)):
            common: set | None = None
            for sequence, (start, end) in zip(sequences, position_borders):
                items = set().union(*sequence[start:end])
                common = items if common is None else common & items
                if not common:
                    break
            if common:
                return False
        return True

    def period_borders(
        self, prefix: Sequence[Hashable], sequence: Sequence[Iterable[Hashable]]
    ) -> list[tuple[int, int]]:
        """Start and end index of the period before each prefix item.

        A start is the index after the first-occurrence match of the previous
        item; an end is the index of the item's last-occurrence match.
        """
        starts = [0] * len(prefix)
        ends = [0] * len(prefix)
        if not prefix:
            return []

        forward = iter(enumerate(prefix))
        position, item = next(forward)
        last = 0
        for index, itemset in enumerate(sequence):
            if item in itemset:
                starts[position] = last
                following = next(forward, None)
                if following is None:
                    break
                position, item = following
                last = index + 1

        backward = reversed(list(enumerate(prefix)))
        position, item = next(backward)
        for index, itemset in reversed(list(enumerate(sequence))):
            if item in itemset:
                ends[position] = index
                following = next(backward, None)
                if following is None:
                    break
                position, item = following

        return list(zip(starts, ends))