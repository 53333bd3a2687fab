"""Vector of 0/1 flags used as transaction occurrence masks."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import chain, repeat


class BitSet:
    """A mutable, fixed-length sequence of bits.

    Bitwise combinations keep the length of the left operand; positions
    missing from the right operand count as 0.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: Iterable[int] = ()) -> None:
        self._bits = [1 if bit else 0 for bit in bits]

    @classmethod
    def filled(cls, size: int, value: int = 0) -> BitSet:
        """Return a bitset of ``size`` bits all set to ``value``."""
        return cls(repeat(value, size))

    def __getitem__(self, index: int) -> int:
        return self._bits[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._bits[index] = 1 if value else 0

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[int]:
        return iter(self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return self._bits == other._bits

    def __lt__(self, other: BitSet) -> bool:
        """True if some common position is 0 here and 1 in ``other``."""
        if not isinstance(other, BitSet):
            return NotImplemented
        return any(a < b for a, b in zip(self._bits, other._bits))

    def __hash__(self) -> int:
        return hash(tuple(self._bits))

    def __repr__(self) -> str:
        return f"BitSet({self._bits!r})"

    def _paired(self, other: BitSet) -> Iterator[tuple[int, int]]:
        return zip(self._bits, chain(other._bits, repeat(0)))

    def __and__(self, other: BitSet) -> BitSet:
        if not isinstance(other, BitSet):
            return NotImplemented
        return BitSet(a and b for a, b in self._paired(other))

    def __iand__(self, other: BitSet) -> BitSet:
        if not isinstance(other, BitSet):
            return NotImplemented
        self._bits = [1 if a and b else 0 for a, b in self._paired(other)]
        return self

    def __or__(self, other: BitSet) -> BitSet:
        if not isinstance(other, BitSet):
            return NotImplemented
        return BitSet(a or b for a, b in self._paired(other))

    def __ior__(self, other: BitSet) -> BitSet:
        if not isinstance(other, BitSet):
            return NotImplemented
        self._bits = [1 if a or b else 0 for a, b in self._paired(other)]
        return self

    def cardinality(self) -> int:
        """Number of bits set to 1."""
        return self._bits.count(1)

    def flip(self, index: int) -> None:
        """Invert the bit at ``index``."""
        self._bits[index] ^= 1

    def resize(self, size: int, value: int = 0) -> None:
        """Truncate to ``size`` bits, or extend with ``value``."""
        if size < len(self._bits):
            del self._bits[size:]
        else:
            fill = 1 if value else 0
            self._bits.extend(repeat(fill, size - len(self._bits)))

    def ones(self) -> list[int]:
        """Indices of the bits that are set."""
        return [index for index, bit in enumerate(self._bits) if bit]

    def __str__(self) -> str:
        return "".join(f"{index} " for index in self.ones())