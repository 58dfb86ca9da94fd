"""Building blocks for long-read sequence mapping: trees, FASTA/FASTQ reading, sorting, CIGAR backtracking and split-index files."""

__version__ = "0.1.0"
__all__ = ["defs", "fastx", "krmq", "ksw", "sorting", "splitidx"]