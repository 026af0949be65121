from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, Optional

import numpy as np
import pandas as pd

from .scan import ScanResult

HEADER = ["seqname", "start", "end", "score", "strand"]
DEFAULT_THRESHOLD = 0.5


def find_sites(result: ScanResult, threshold: float = DEFAULT_THRESHOLD) -> pd.DataFrame:
    """Windows whose probability exceeds `threshold`, on either strand.

    Output columns:
      - seqname
      - start: 1-based, inclusive
      - end: 1-based, inclusive (start + L - 1)
      - score: sense or antisense probability
      - strand: '+' or '-'

    Rows are in increasing position; when both strands of a window pass,
    '+' comes first. Scores are not sorted.
    """
    plus = np.flatnonzero(result.sense_probability > threshold)
    minus = np.flatnonzero(result.antisense_probability > threshold)

    idx = np.concatenate([plus, minus])
    strand_key = np.concatenate([np.zeros(len(plus), dtype=np.int8), np.ones(len(minus), dtype=np.int8)])
    score = np.concatenate([result.sense_probability[plus], result.antisense_probability[minus]])

    order = np.lexsort((strand_key, idx))
    idx = idx[order]
    strand_key = strand_key[order]

    return pd.DataFrame(
        {
            "seqname": [result.seq_name] * len(idx),
            "start": idx + 1,
            "end": idx + result.motif_length,
            "score": score[order],
            "strand": np.where(strand_key == 0, "+", "-"),
        },
        columns=HEADER,
    )


def write_sites(sites: pd.DataFrame, out: Optional[str | Path | IO[str]] = None) -> None:
    """Write a site table as TSV with two-decimal scores.

    `out` may be a path, an open text handle, or None for stdout.
    """
    if out is None:
        out = sys.stdout
    sites.to_csv(out, sep="\t", index=False, float_format="%.2f", lineterminator="\n")


def score_track(result: ScanResult) -> pd.DataFrame:
    """Full per-window table of energies and probabilities on both strands."""
    pos = np.arange(len(result))
    return pd.DataFrame(
        {
            "seqname": [result.seq_name] * len(pos),
            "start": pos + 1,
            "end": pos + result.motif_length,
            "sense_energy": result.sense_energy,
            "sense_probability": result.sense_probability,
            "antisense_energy": result.antisense_energy,
            "antisense_probability": result.antisense_probability,
        }
    )


def write_track(result: ScanResult, path: str | Path) -> Path:
    path = Path(path)
    score_track(result).to_csv(path, sep="\t", index=False)
    return path
