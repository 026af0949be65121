from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, NamedTuple, Optional

from Bio import SeqIO

from .errors import ParseError
from .seqs import normalize_sequence


@dataclass(frozen=True)
class SequenceRecord:
    """A simple sequence record.

    Attributes
    ----------
    name:
        Sequence identifier (the FASTA id).
    sequence:
        Sequence string (uppercase, ambiguity codes kept).
    """

    name: str
    sequence: str


def read_fasta(path: str | Path) -> List[SequenceRecord]:
    """Read a FASTA file into a list of SequenceRecord.

    Uses BioPython, so it supports multi-line sequences.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"FASTA file not found: {path}")
    out: List[SequenceRecord] = []
    for rec in SeqIO.parse(str(path), "fasta"):
        out.append(SequenceRecord(name=str(rec.id), sequence=normalize_sequence(str(rec.seq))))
    if not out:
        raise ValueError(f"No sequences found in FASTA: {path}")
    return out


def read_sequence(path: str | Path, name: Optional[str] = None) -> SequenceRecord:
    """Read one sequence from a FASTA file.

    Parameters
    ----------
    path:
        FASTA file (typically a single chromosome).
    name:
        Record id to select. If None, the first record is returned.
    """
    records = read_fasta(path)
    if name is None:
        return records[0]
    for rec in records:
        if rec.name == name:
            return rec
    raise ValueError(
        f"Sequence '{name}' not found in {path}. Available: {[r.name for r in records][:10]}"
    )


class MotifRecord(NamedTuple):
    """One (motif, energy) line of a motif table."""

    motif: str
    energy: float
    line_number: Optional[int] = None


def read_motif_table(path: str | Path) -> List[MotifRecord]:
    """Read a motif energy table.

    Expected, one record per line:
        MOTIF  ENERGY

    Fields are separated by whitespace. Blank lines and lines starting with '#'
    are skipped. Records are returned in file order; ordering by energy is
    checked later, when the MotifTable is built.

    Raises
    ------
    FileNotFoundError
        If the table does not exist.
    ParseError
        For any line that is not exactly a motif and a finite number.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Motif table not found: {path}")

    out: List[MotifRecord] = []
    with path.open() as f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            fields = line.split()
            if len(fields) != 2:
                raise ParseError(
                    f"expected 'motif energy', found {len(fields)} field(s)",
                    line_number=lineno,
                    line=line,
                    path=path,
                )
            motif, energy = fields
            try:
                value = float(energy)
            except ValueError:
                raise ParseError(
                    f"energy '{energy}' is not a number",
                    line_number=lineno,
                    line=line,
                    path=path,
                ) from None
            if not math.isfinite(value):
                raise ParseError("energy must be finite", line_number=lineno, line=line, path=path)
            out.append(MotifRecord(motif, value, lineno))
    return out
