"""Merging closed sequences into closed partial orders."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping, Sequence

from tskm.bitset import BitSet
from tskm.music import Chord
from tskm.sequences import ClosedSequence, Node

Graph = dict[Node, set[Node]]


def _contains_run(needle: Iterable[Chord], haystack: Iterable[Chord]) -> bool:
    """True if ``needle`` occurs as a contiguous run of ``haystack``.

    An empty needle is found in any non-empty haystack.
    """
    needle = tuple(needle)
    haystack = tuple(haystack)
    if not needle:
        return bool(haystack)
    width = len(needle)
    return any(
        haystack[start : start + width] == needle
        for start in range(len(haystack) - width + 1)
    )


def _phrase_key(phrase: Iterable[ClosedSequence]) -> tuple[int, ...]:
    return tuple(sorted(sequence.id for sequence in phrase))


class MergeSequences:
    """Builds a single closed partial order from a set of sequences."""

    def __init__(self) -> None:
        self.graph: Graph = {}
        self.pointers: dict[tuple[Chord, ...], dict[int, Node]] = {}

    def run(self, sequences: Iterable[ClosedSequence]) -> Graph:
        """Merge ``sequences`` and return the graph as node -> successors."""
        sequences = set(sequences)
        self.preprocessing(sequences)
        self.merge_sequences(sequences)
        return self.graph

    def merge_sequences(self, sequences: Iterable[ClosedSequence]) -> None:
        """Assign a node to every position, sharing it where the merge keeps all paths."""
        ordered = sorted(sequences)
        counter = 0
        for seq in ordered:
            chords = seq.sequence
            positions = self.pointers[chords]
            for i in list(positions):
                if positions[i].internal_id != -1:
                    continue
                node = Node(counter, chords[i])
                counter += 1
                self.add_node(positions, i, node)
                for other in ordered:
                    if other == seq:
                        continue
                    other_chords = other.sequence
                    other_positions = self.pointers[other_chords]
                    for j in list(other_positions):
                        if other_positions[j].internal_id == -1 and self.path_preserving(
                            ordered, chords, i, other_chords, j
                        ):
                            self.add_node(other_positions, j, node)

    def path_preserving(
        self,
        sequences: Iterable[ClosedSequence],
        seq1: Sequence[Chord],
        i: int,
        seq2: Sequence[Chord],
        j: int,
    ) -> bool:
        """Whether merging ``seq1[i]`` with ``seq2[j]`` only creates existing paths."""
        seq1 = tuple(seq1)
        seq2 = tuple(seq2)
        if seq1[i] != seq2[j]:
            return False
        seq1_seq2 = seq1[: i + 1] + seq2[j + 1 :]
        seq2_seq1 = seq2[: j + 1] + seq1[i + 1 :]
        found_first = False
        found_second = False
        for sequence in sorted(sequences):
            chords = sequence.sequence
            if self.is_subsequence(seq1_seq2, chords):
                if found_second:
                    return True
                found_first = True
            if self.is_subsequence(seq2_seq1, chords):
                if found_first:
                    return True
                found_second = True
        return False

    def is_subsequence(self, s1: Iterable[Chord], s2: Iterable[Chord]) -> bool:
        """True if ``s1`` occurs contiguously in ``s2``."""
        return _contains_run(s1, s2)

    def preprocessing(self, sequences: Iterable[ClosedSequence]) -> None:
        """Create an unassigned node for every position of every sequence."""
        for seq in sorted(sequences):
            self.pointers.setdefault(seq.sequence, {index: Node() for index in range(len(seq))})

    def add_node(self, positions: MutableMapping[int, Node], index: int, node: Node) -> None:
        """Place ``node`` at ``index`` and link it to assigned neighbours."""
        positions[index] = node
        self.graph.setdefault(node, set())
        before = positions.get(index - 1)
        if before is not None and before.internal_id != -1:
            self.add_edge(before, node)
        after = positions.get(index + 1)
        if after is not None and after.internal_id != -1:
            self.add_edge(node, after)

    def add_edge(self, source: Node, target: Node) -> None:
        """Add an edge between two distinct nodes."""
        if source == target:
            return
        self.graph.setdefault(source, set()).add(target)
        self.graph.setdefault(target, set())


def preprocessing_cpo(phrases: Mapping[frozenset, BitSet]) -> dict[frozenset, BitSet]:
    """Drop from each phrase the sequences contained in a longer one of the same phrase.

    When two phrases reduce to the same set, the first one in phrase order wins.
    """
    out: dict[frozenset, BitSet] = {}
    for phrase, bits in sorted(phrases.items(), key=lambda entry: _phrase_key(entry[0])):
        to_remove = {
            first
            for first in phrase
            for second in phrase
            if len(first) != len(second) and _contains_run(first.sequence, second.sequence)
        }
        out.setdefault(frozenset(set(phrase) - to_remove), bits)
    return out


def closed_partial_order(phrases: Mapping[frozenset, BitSet]) -> dict[BitSet, Graph]:
    """Map each occurrence mask to the closed partial order of its phrase."""
    inverse: dict[BitSet, frozenset] = {}
    for phrase, bits in sorted(phrases.items(), key=lambda entry: _phrase_key(entry[0])):
        inverse.setdefault(bits, phrase)
    return {bits: MergeSequences().run(phrase) for bits, phrase in inverse.items()}