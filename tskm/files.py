"""Reading and writing interval data and symbol files."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class IntervalData:
    """Parallel lists of interval starts, ends and symbol ids."""

    start: list[int] = field(default_factory=list)
    end: list[int] = field(default_factory=list)
    symbol: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.symbol)


@dataclass
class SymbolTable:
    """Parallel lists of symbol ids, labels and descriptions."""

    symbol: list[int] = field(default_factory=list)
    label: list[str] = field(default_factory=list)
    description: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.symbol)


@dataclass
class DataSymbols:
    """An interval data file paired with its symbol table."""

    filename: str
    data: IntervalData
    symbols: SymbolTable


def _scan_ints(text: str) -> Iterator[int]:
    pos = 0
    while (match := _INT.match(text, pos)) is not None:
        yield int(match.group(1))
        pos = match.end()


def _leading_int(token: str) -> int:
    match = _INT.match(token)
    return int(match.group(1)) if match else 0


def read_data(path: str | os.PathLike[str]) -> IntervalData:
    """Read ``symbol start end`` triples until the first malformed value."""
    text = Path(path).read_text(encoding="utf-8")
    values = _scan_ints(text)
    data = IntervalData()
    for symbol, start, end in zip(values, values, values):
        data.symbol.append(symbol)
        data.start.append(start)
        data.end.append(end)
    return data


def read_symbols(path: str | os.PathLike[str]) -> SymbolTable:
    """Read tab separated ``id label description`` lines."""
    text = Path(path).read_text(encoding="utf-8")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    table = SymbolTable()
    for number, line in enumerate(lines, start=1):
        tokens = line.split("\t")
        if tokens and tokens[-1] == "":
            tokens.pop()
        if len(tokens) < 3:
            raise ValueError(f"{path}:{number}: expected three tab separated fields")
        table.symbol.append(_leading_int(tokens[0]))
        table.label.append(tokens[1])
        table.description.append(tokens[2])
    return table


def load_files(path: str | os.PathLike[str], prefix: str = "") -> list[DataSymbols]:
    """Load every ``.int`` file and ``tskm`` symbol file starting with ``prefix``.

    Data files and symbol files are each sorted by name and paired by position.
    """
    directory = Path(path)
    if not directory.is_dir():
        raise FileNotFoundError(f"No such directory: {path}")
    data: dict[str, IntervalData] = {}
    symbols: dict[str, SymbolTable] = {}
    for entry in directory.iterdir():
        name = entry.name
        if len(name) < 5 or not name.startswith(prefix) or not entry.is_file():
            continue
        if name.endswith(".int"):
            data[name[:-4]] = read_data(entry)
        if name.endswith("tskm"):
            symbols[name[:-5]] = read_symbols(entry)
    if not data:
        raise FileNotFoundError(f"No files found in {path}")
    if len(symbols) < len(data):
        raise ValueError(f"Missing symbol files in {path}")
    return [
        DataSymbols(name, interval_data, table)
        for (name, interval_data), (_, table) in zip(sorted(data.items()), sorted(symbols.items()))
    ]


def save_file(path: str | os.PathLike[str], text: str) -> None:
    """Write ``text`` to ``path``, replacing any existing content."""
    Path(path).write_text(text, encoding="utf-8")