from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from tqdm import tqdm

from .motifs import MotifTable
from .utils import n_windows, tile_windows

_LOG = logging.getLogger("tfbsscan.scan")

DEFAULT_CHUNK_SIZE = 1_000_000

Arrays = Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]


@dataclass
class ScanResult:
    """Per-window scores of one sequence against one MotifTable.

    Index ``i`` of every array is the window ``seq[i:i+motif_length]``.
    Windows missing from the table score 0.0.
    """

    seq_name: str
    receptor: str
    motif_length: int
    sense_energy: np.ndarray
    sense_probability: np.ndarray
    antisense_energy: np.ndarray
    antisense_probability: np.ndarray

    def __len__(self) -> int:
        return int(self.sense_energy.shape[0])


def _lookup(mapping: dict, seq: str, width: int, count: int) -> np.ndarray:
    get = mapping.get
    return np.fromiter(
        (get(seq[i : i + width], 0.0) for i in range(count)),
        dtype=np.float64,
        count=count,
    )


def scan_chunk(table: MotifTable, seq: str) -> Arrays:
    """Score every window of `seq` on both strands."""
    width = table.motif_length
    count = n_windows(len(seq), width)
    return (
        _lookup(table.sense_energy, seq, width, count),
        _lookup(table.sense_probability, seq, width, count),
        _lookup(table.antisense_energy, seq, width, count),
        _lookup(table.antisense_probability, seq, width, count),
    )


# Set once per worker process by _init_worker
_WORKER_TABLE: Optional[MotifTable] = None


def _init_worker(table: MotifTable) -> None:
    global _WORKER_TABLE
    _WORKER_TABLE = table


def _scan_in_worker(seq: str) -> Arrays:
    if _WORKER_TABLE is None:
        raise RuntimeError("scan worker started without a MotifTable")
    return scan_chunk(_WORKER_TABLE, seq)


def scan_sequence(
    table: MotifTable,
    seq: str,
    seq_name: str = "",
    *,
    workers: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress: bool = False,
) -> ScanResult:
    """Scan a sequence and its reverse complement with a MotifTable.

    Parameters
    ----------
    table:
        Motif lookups (not modified).
    seq:
        Uppercase sequence. Windows containing symbols that are not in the
        table (N, ambiguity codes) score 0.0.
    seq_name:
        Label carried into the result.
    workers:
        Number of processes. With more than one, chunks are scanned in a
        ProcessPoolExecutor; the result is identical to a sequential scan.
    chunk_size:
        Window offsets per chunk.
    progress:
        Show a tqdm progress bar over chunks.

    Returns
    -------
    ScanResult
        Four arrays of length ``max(len(seq) - L + 1, 0)``.
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")

    width = table.motif_length
    tiles = tile_windows(len(seq), width, chunk_size)
    chunks = [seq[start : stop + width - 1] for start, stop in tiles]
    _LOG.info(
        "Scanning %s (%d bp, %d windows) with %s in %d chunk(s)",
        seq_name or "<unnamed>",
        len(seq),
        n_windows(len(seq), width),
        table.receptor,
        len(chunks),
    )

    bar = dict(total=len(chunks), disable=not progress, desc=f"scan {seq_name}", unit="chunk")
    if workers == 1 or len(chunks) <= 1:
        parts = [scan_chunk(table, c) for c in tqdm(chunks, **bar)]
    else:
        with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker, initargs=(table,)) as ex:
            parts = list(tqdm(ex.map(_scan_in_worker, chunks), **bar))

    if parts:
        arrays = [np.concatenate([p[k] for p in parts]) for k in range(4)]
    else:
        arrays = [np.zeros(0, dtype=np.float64) for _ in range(4)]

    return ScanResult(
        seq_name=seq_name,
        receptor=table.receptor,
        motif_length=width,
        sense_energy=arrays[0],
        sense_probability=arrays[1],
        antisense_energy=arrays[2],
        antisense_probability=arrays[3],
    )
