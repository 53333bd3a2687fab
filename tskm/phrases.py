"""Phrase mining: closed sequences, margin-closed phrases and their merging."""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterable, Mapping, Sequence

from tskm.bide import PseudoBide
from tskm.bitset import BitSet
from tskm.itemsets import MarginDCIClosedIntersection
from tskm.merging import Graph, closed_partial_order, preprocessing_cpo
from tskm.music import Chord
from tskm.sequences import ClosedSequence


def _occurs_in(items: Sequence[Hashable], itemsets: Iterable[Iterable[Hashable]]) -> bool:
    """True if ``items`` appear in order, one per successive itemset."""
    remaining = iter(items)
    target = next(remaining, None)
    if target is None:
        return True
    for itemset in itemsets:
        if target in itemset:
            target = next(remaining, None)
            if target is None:
                return True
    return False


def _chord_key(sequence: Sequence[Chord]) -> tuple[int, ...]:
    return tuple(chord.global_id for chord in sequence)


def closed_set_sequence_to_transaction(
    windows: Iterable[Iterable[Iterable[Chord]]],
    sequences: Iterable[Sequence[Chord]],
) -> dict[frozenset, int]:
    """Turn each window into the set of closed sequences it holds and count them.

    Sequences are numbered in chord order.
    """
    numbered = [
        (index, tuple(sequence))
        for index, sequence in enumerate(sorted(sequences, key=_chord_key))
    ]
    counts: Counter[frozenset] = Counter()
    for window in windows:
        window = [set(itemset) for itemset in window]
        phrase = frozenset(
            ClosedSequence(sequence, index)
            for index, sequence in numbered
            if _occurs_in(sequence, window)
        )
        counts[phrase] += 1
    return dict(counts)


class PhraseMiner:
    """Closed sequence mining, closed phrase mining and sequence merging."""

    def __init__(
        self,
        sequence_window_size: int = 1000,
        minimal_closed_sequence_support: int = 8,
        minimal_closed_phrase_support: int = 8,
        alpha_for_closed_phrases: float = 0.3,
    ) -> None:
        self.sequence_window_size = sequence_window_size
        self.minimal_closed_sequence_support = minimal_closed_sequence_support
        self.minimal_closed_phrase_support = minimal_closed_phrase_support
        self.alpha_for_closed_phrases = alpha_for_closed_phrases
        self.closed_sequences: set[tuple] = set()
        self.closed_phrases: dict[frozenset, BitSet] = {}
        self.closed_phrases_with_support: dict[frozenset, int] = {}
        self.phrase_lattice: dict[BitSet, Graph] = {}

    def run(self, windows: Iterable[Iterable[Iterable[Chord]]]) -> dict[BitSet, Graph]:
        """Mine the closed partial orders of windows of chord sets."""
        phrases = self.closed_sequence_mining(windows)
        closed = self.closed_phrase_mining(phrases)
        return self.sequence_merging(closed)

    def closed_sequence_mining(self, windows: Iterable[Iterable[Iterable[Chord]]]) -> dict[frozenset, int]:
        """Find closed sequences and describe each window by those it holds."""
        windows = [[frozenset(itemset) for itemset in window] for window in windows]
        bide = PseudoBide(self.minimal_closed_sequence_support)
        self.closed_sequences = set(bide.run(windows))
        return closed_set_sequence_to_transaction(windows, self.closed_sequences)

    def closed_phrase_mining(self, phrases: Mapping[frozenset, int]) -> dict[frozenset, BitSet]:
        """Mine margin-closed sets of closed sequences."""
        miner = MarginDCIClosedIntersection(self.minimal_closed_phrase_support, self.alpha_for_closed_phrases)
        self.closed_phrases = miner.run(phrases)
        self.closed_phrases_with_support = miner.support_map()
        return self.closed_phrases

    def sequence_merging(self, closed_phrases: Mapping[frozenset, BitSet]) -> dict[BitSet, Graph]:
        """Build a closed partial order for each closed phrase."""
        reduced = preprocessing_cpo(closed_phrases)
        self.phrase_lattice = closed_partial_order(reduced)
        return self.phrase_lattice