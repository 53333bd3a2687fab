"""Closed chord sequences and partial-order graph nodes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from tskm.music import Chord


class ClosedSequence:
    """A mined sequence of chords, identified by ``id``."""

    __slots__ = ("sequence", "id", "label")

    def __init__(self, sequence: Iterable[Chord], id: int, label: str | None = None) -> None:
        self.sequence: tuple[Chord, ...] = tuple(sequence)
        self.id = id
        self.label = str(id) if label is None else label

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClosedSequence):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: ClosedSequence) -> bool:
        if not isinstance(other, ClosedSequence):
            return NotImplemented
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __iter__(self) -> Iterator[Chord]:
        return iter(self.sequence)

    def __len__(self) -> int:
        return len(self.sequence)

    def __repr__(self) -> str:
        return f"ClosedSequence(id={self.id!r}, length={len(self.sequence)})"

    def __str__(self) -> str:
        labels = "".join(f"{chord.label} " for chord in self.sequence)
        return (
            "------------------ ClosedSequence ------------------\n"
            f"closedSeqID : {self.id}\n"
            f"sequence    : [ {labels}]\n"
        )


class Node:
    """A node of a closed partial order; ``internal_id`` -1 means unassigned."""

    __slots__ = ("internal_id", "content")

    def __init__(self, internal_id: int = -1, content: Chord | None = None) -> None:
        self.internal_id = internal_id
        self.content = Chord() if content is None else content

    @property
    def id(self) -> str:
        return str(self.internal_id)

    @property
    def label(self) -> str:
        return self.content.label

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.internal_id == other.internal_id

    def __lt__(self, other: Node) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.internal_id < other.internal_id

    def __hash__(self) -> int:
        return hash(self.internal_id)

    def __repr__(self) -> str:
        return f"Node(internal_id={self.internal_id!r}, content={self.content!r})"

    def __str__(self) -> str:
        return f"InternalID : {self.id}\n{self.content}"