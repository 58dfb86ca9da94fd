# minikit

Pure-Python building blocks for a long-read sequence mapper. It has no
dependencies outside the standard library.

## Modules

- `minikit.krmq` – `RmqTree`, a balanced (AVL) binary search tree ordered by
  `key(item)` in which every subtree remembers its item of smallest
  `value(item)`. Keys are unique.
  - `insert(item)` returns the stored item (the new one, or the one already
    holding that key) and the number of items whose key is not greater.
  - `find(key)` returns the item or `None`, plus the same count.
  - `interval(key)` returns the nearest items below and above the key (both
    the match when the key is present).
  - `rmq(lo, hi)` returns the item of smallest value with key in the closed
    range `[lo, hi]`, or `None`.
  - `erase(key)` returns the removed item and its count, or `(None, 0)`;
    `erase_first()` removes and returns the smallest item, raising
    `IndexError` on an empty tree.
  - `len()`, in-order iteration, `reversed()` and `iter_from(key)`.
- `minikit.fastx` – `FastxReader` reads `FastxRecord`s (`name`, `seq`,
  `comment`, `qual`; `qual` is `None` for FASTA) from a binary or text stream,
  via `read()` or iteration, and works as a context manager. `open_fastx(path)`
  opens a plain or gzip-compressed file; `"-"` or `None` reads standard input.
  A FASTQ record whose quality line is missing or of a different length from
  its sequence raises `TruncatedQualityError`.
- `minikit.sorting` – `ksmall(values, k, less)` returns the k-th smallest
  element (0-based) by quick-select, reordering the list in place and raising
  `IndexError` for `k` out of range; `heap_make` / `heap_down` build and
  maintain a max-heap; `radix_sort(items, key, key_bytes)` sorts in place by an
  unsigned integer key.
- `minikit.defs` – flag enums `MapFlag`, `IndexFlag`, `SeedFlag`, `DebugFlag`;
  `CigarOp` and `cigar_to_string` for BAM-encoded CIGAR words
  (`length << 4 | op`); the `IndexSequence` and `IndexOptions` records;
  `seq4_set` / `seq4_get` for 4-bit codes packed into 32-bit words;
  `roundup32`; and the fast approximate single-precision `mg_log2`
  (intended for arguments of at least 2).
- `minikit.ksw` – `ExtzResult` holds the scores and CIGAR of an extension
  alignment, with `reset()` and `apply_zdrop(...)` for best-score tracking and
  the Z-drop test; `push_cigar` appends to a CIGAR, merging runs of the same
  operation; `backtrack` turns a backtrack matrix into a CIGAR.
- `minikit.splitidx` – temporary files holding the k-mer size and the
  sequence names and lengths of each index part: `split_path(prefix, part)`
  gives the file name, `split_init(prefix, part)` writes the header of an
  `IndexPart` and returns the file open for writing,
  `split_merge_prep(prefix, n_splits)` opens every part file and returns one
  combined `IndexPart`, the open files (for the caller to close) and the
  number of sequences in each part, and `split_rm_tmp` deletes the files.
  Failures to write, open or read raise `SplitIndexError`; `n_splits < 1`
  raises `ValueError`.

## Example

```python
from minikit.fastx import open_fastx
from minikit.krmq import RmqTree

with open_fastx("reads.fq.gz") as reader:
    for record in reader:
        print(record.name, len(record.seq))

tree = RmqTree(key=lambda item: item[0], value=lambda item: item[1])
for item in [(1, 5), (3, 2), (7, 9)]:
    tree.insert(item)
print(tree.rmq(1, 7))   # (3, 2)
```

## What it does not do

minikit is a library of parts only. It does not build or load minimizer
indices, compute seeds or chains, run the dynamic-programming alignment that
fills a backtrack matrix, or write SAM/PAF output, and it has no command-line
program.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```