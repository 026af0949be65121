from __future__ import annotations

from pathlib import Path
from typing import List, Tuple


def ensure_dir(path: str | Path) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def n_windows(seq_len: int, width: int) -> int:
    """Number of offsets where a window of `width` fits in a sequence."""
    return max(seq_len - width + 1, 0)


def tile_windows(seq_len: int, width: int, chunk_size: int) -> List[Tuple[int, int]]:
    """Split window offsets into contiguous (start, stop) ranges.

    Each range covers at most `chunk_size` window offsets. Scanning the range
    needs the sequence slice ``[start, stop + width - 1)``, so neighbouring
    slices overlap by ``width - 1`` bases and no window is lost at a boundary.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")
    total = n_windows(seq_len, width)
    return [(s, min(s + chunk_size, total)) for s in range(0, total, chunk_size)]
