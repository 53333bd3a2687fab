"""Interval merging and closed chord filtering helpers."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sized
from typing import TypeVar

K = TypeVar("K", bound=Sized)
V = TypeVar("V")


def duration(start: int, end: int) -> int:
    """Length of the closed interval ``[start, end]``."""
    return end - start + 1


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.copysign(math.inf, numerator) if numerator else math.nan
    return numerator / denominator


def is_mergeable(
    start: int,
    end: int,
    dur: int,
    current_start: int,
    current_end: int,
    current_dur: int,
    alpha_complement: float,
    gap_maximum: float,
    original_gap_filter: bool,
) -> bool:
    """Whether an interval and the following one may be merged across their gap.

    The gap must not exceed ``gap_maximum`` and the covered share of the
    merged span must exceed ``alpha_complement``. With ``original_gap_filter``
    the given durations are used as coverage, else the interval lengths.
    """
    if duration(end, current_start) > gap_maximum:
        return False
    duration_all = duration(start, current_end)
    if original_gap_filter:
        duration_merged = dur + current_dur
    else:
        duration_merged = duration(start, end) + duration(current_start, current_end)
    return _ratio(duration_merged, duration_all) > alpha_complement


def chord_size_filter(closed_chords: Mapping[K, V], min_size: int, max_size: int) -> dict[K, V]:
    """Keep the chords whose number of tones lies in ``[min_size, max_size]``."""
    return {chord: occurrences for chord, occurrences in closed_chords.items() if min_size <= len(chord) <= max_size}