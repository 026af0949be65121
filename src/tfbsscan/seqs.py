from __future__ import annotations

_COMPLEMENT = str.maketrans("ACGT", "TGCA")


def reverse_complement(seq: str) -> str:
    """Reverse complement of a nucleotide string.

    Only uppercase A/C/G/T are complemented; every other character
    (ambiguity codes, N, lowercase) is copied through unchanged.
    """
    return seq.translate(_COMPLEMENT)[::-1]


def normalize_sequence(seq: str) -> str:
    """Uppercase a sequence, leaving its symbols otherwise untouched."""
    return (seq or "").upper()
