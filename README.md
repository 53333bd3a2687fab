# tskm

Building blocks for mining temporal knowledge from symbolic interval data:
closed sequences of chords, margin-closed phrases (sets of closed sequences
that occur together) and the closed partial orders obtained by merging the
sequences of a phrase. The package has no dependencies outside the standard
library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `tskm.bitset` – `BitSet`, a mutable vector of 0/1 flags used as a
  transaction mask. It supports indexing, `&`, `|` (and their in-place
  forms, which keep the length of the left operand), `cardinality()`,
  `ones()`, `flip()`, `resize()` and `BitSet.filled(size, value)`. It is
  hashable and can be used as a dictionary key.
- `tskm.music` – `Tone`, `Chord` and `ChordSymbol`, each identified and
  ordered by `global_id`, plus `tones_label(tones)`, which gives the labels
  of the tones in id order as `"[a b c]"`. `Chord.from_tones` builds a chord
  whose id is the sum of its tones' ids. Note that `Chord.retain_all`
  removes the given tones from the chord.
- `tskm.sequences` – `ClosedSequence` (a tuple of chords with an `id` that
  decides equality, order and hashing) and `Node` (a partial-order node;
  `internal_id == -1` means unassigned).
- `tskm.files` – `read_data(path)` reads whitespace separated
  `symbol start end` integer triples into an `IntervalData`;
  `read_symbols(path)` reads tab separated `id label description` lines
  into a `SymbolTable` (a line with fewer than three fields raises
  `ValueError`); `load_files(path, prefix)` loads every `*.int` file and
  every file ending in `tskm` whose name starts with `prefix`, pairs them
  by sorted name and returns a list of `DataSymbols`. It raises
  `FileNotFoundError` if the directory is missing or holds no data file, and
  `ValueError` if there are fewer symbol files than data files.
  `save_file(path, text)` writes text to a file.
- `tskm.filters` – `duration(start, end)` (length of a closed interval),
  `is_mergeable(...)`, which decides whether two intervals may be merged
  across their gap, and `chord_size_filter(closed_chords, min_size,
  max_size)`, which keeps the entries whose key size lies in
  `[min_size, max_size]`.
- `tskm.itemsets` – `MarginDCIClosedIntersection`, a DCI-Closed miner over
  transactions given as `{frozenset(items): multiplicity}`. With
  `alpha > 0` a closed set is kept only if no direct superset retains at
  least `1 - alpha` of its support. `run()` returns
  `{frozenset: BitSet}`; `support_map()` gives the support of each result.
- `tskm.bide` – `PseudoBide`, BIDE closed sequential pattern mining over
  sequences of itemsets. `run(sequences)` returns a set of tuples of items.
- `tskm.merging` – `MergeSequences`, which merges a set of
  `ClosedSequence` objects into one graph (`{Node: set[Node]}`), together
  with `preprocessing_cpo(phrases)`, which drops sequences contained in a
  longer sequence of the same phrase, and `closed_partial_order(phrases)`,
  which maps each occurrence mask to its merged graph.
- `tskm.phrases` – `PhraseMiner`, which chains closed sequence mining,
  closed phrase mining and sequence merging, and
  `closed_set_sequence_to_transaction(windows, sequences)`, which describes
  each window by the set of closed sequences it holds and counts those sets.

## Examples

Closed sequences from windows of chord sets:

```python
from tskm.bide import PseudoBide
from tskm.music import Chord

a, b, c = Chord(1), Chord(2), Chord(3)
windows = [
    [{a}, {b}, {c}],
    [{a}, {b}],
    [{a}, {c}, {b}],
]

bide = PseudoBide(min_support=2)
for sequence in sorted(bide.run(windows)):
    print([chord.id for chord in sequence])
```

Margin-closed itemsets from weighted transactions:

```python
from tskm.itemsets import MarginDCIClosedIntersection

miner = MarginDCIClosedIntersection(min_support=2, alpha=0.0)
closed = miner.run({frozenset({"x", "y"}): 3, frozenset({"x"}): 1})
for itemset, transactions in closed.items():
    print(sorted(itemset), transactions.cardinality())
```

The whole phrase-mining chain on the windows above:

```python
from tskm.phrases import PhraseMiner

miner = PhraseMiner(
    minimal_closed_sequence_support=2,
    minimal_closed_phrase_support=2,
    alpha_for_closed_phrases=0.3,
)
lattice = miner.run(windows)
print(len(miner.closed_sequences), len(miner.closed_phrases), len(lattice))
```

`PhraseMiner` keeps its intermediate results in `closed_sequences`,
`closed_phrases`, `closed_phrases_with_support` and `phrase_lattice`.

## What the package does not do

- There is no command-line program; everything is used from Python.
- There is no chord-mining stage: tone intervals are not filtered, turned
  into chord sequences or mined for closed chords here. `filters` offers
  only the interval merge test and the chord size filter.
- `PhraseMiner.run` expects the data already cut into windows (lists of
  chord sets). Turning interval files into such windows, including
  dropping repeated successive chord sets, is left to the caller;
  `sequence_window_size` is stored but not used by the mining steps.
- Graphs are returned as plain dictionaries; nothing is drawn or written
  in a graph format.