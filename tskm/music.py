"""Tones, chords and chord symbols."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Tone:
    """A labelled interval symbol; identity and order come from ``global_id``."""

    global_id: int
    series_id: int = field(default=0, compare=False)
    series: str = field(default="", compare=False)
    label: str = field(default="", compare=False)

    @property
    def id(self) -> str:
        return str(self.global_id)

    def __str__(self) -> str:
        return (
            "------------------ Tone ------------------\n"
            f"\t\t\tglobalid : {self.global_id}\n"
            f"\t\t\tseries   : {self.series_id}\n"
            f"\t\t\tlabel    : {self.label}\n"
        )


@dataclass(order=True, unsafe_hash=True)
class Chord:
    """A set of tones; identity and order come from ``global_id``."""

    global_id: int = 0
    tones: set[Tone] = field(default_factory=set, compare=False)
    label: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.tones = set(self.tones)
        if self.label is None:
            self.label = str(self.global_id)

    @classmethod
    def from_tones(cls, tones: Iterable[Tone]) -> Chord:
        """Build a chord whose id is the sum of its tones' ids."""
        tone_set = set(tones)
        return cls(sum(tone.global_id for tone in tone_set), tone_set)

    @property
    def id(self) -> str:
        return str(self.global_id)

    def insert(self, tone: Tone) -> None:
        self.tones.add(tone)

    def erase(self, tone: Tone) -> None:
        self.tones.discard(tone)

    def clear(self) -> None:
        self.tones.clear()

    def insert_all(self, tones: Iterable[Tone]) -> None:
        self.tones.update(tones)

    def retain_all(self, tones: Iterable[Tone]) -> None:
        """Remove from this chord every tone that appears in ``tones``."""
        self.tones.difference_update(tones)

    def __str__(self) -> str:
        header = (
            "------------------ Chord ------------------\n"
            f"globalid : {self.global_id}\n"
            f"stringid : {self.id}\n"
            f"label    : {self.label}\n"
            f"hashcode : {self.global_id}\n"
            "Tones    : \n"
        )
        return header + "".join(str(tone) for tone in sorted(self.tones)) + "\n"


def tones_label(tones: Iterable[Tone]) -> str:
    """Bracketed, space separated labels of the tones in id order."""
    return "[" + " ".join(tone.label for tone in sorted(tones)) + "]"


@dataclass(eq=False)
class ChordSymbol:
    """A chord as read back from a symbol file."""

    global_id: int
    label: str
    tone_set: str

    @property
    def id(self) -> str:
        return str(self.global_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChordSymbol):
            return NotImplemented
        return self.global_id == other.global_id

    def __hash__(self) -> int:
        return hash(self.global_id)

    def __lt__(self, other: ChordSymbol) -> bool:
        """True whenever the two symbols have different ids."""
        if not isinstance(other, ChordSymbol):
            return NotImplemented
        return self.global_id != other.global_id

    def __str__(self) -> str:
        return (
            "------------------ ChordSymbol ------------------\n"
            f"globalID : {self.global_id}\n"
            f"stringID : {self.id}\n"
            f"label    : {self.label}\n"
            f"hashcode : {self.global_id}\n"
        )