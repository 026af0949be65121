from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .errors import ParseError
from .io import MotifRecord, read_motif_table
from .seqs import reverse_complement

_LOG = logging.getLogger("tfbsscan.motifs")

ORDER_MODES = ("error", "sort", "trust")


@dataclass(frozen=True)
class MotifTable:
    """Energy and rank-derived probability lookups for one receptor.

    Attributes
    ----------
    receptor:
        Receptor (transcription factor) label.
    motif_length:
        Width L shared by every motif in the table.
    sense_energy, sense_probability:
        Keyed by motif, as given in the source table.
    antisense_energy, antisense_probability:
        Keyed by the reverse complement of each motif, carrying that motif's
        energy and probability.

    Probabilities are ``1 - rank / 4**L`` with rank 1 for the highest energy.
    They are a percentile-like score, not a normalized distribution.
    """

    receptor: str
    motif_length: int
    sense_energy: Dict[str, float]
    sense_probability: Dict[str, float]
    antisense_energy: Dict[str, float]
    antisense_probability: Dict[str, float]

    def __len__(self) -> int:
        return len(self.sense_energy)

    def lookup(self, window: str) -> Tuple[float, float, float, float]:
        """Return (sense energy, sense prob, antisense energy, antisense prob).

        Windows absent from a mapping score 0.0 for that mapping.
        """
        return (
            self.sense_energy.get(window, 0.0),
            self.sense_probability.get(window, 0.0),
            self.antisense_energy.get(window, 0.0),
            self.antisense_probability.get(window, 0.0),
        )


RecordLike = Union[MotifRecord, Tuple[str, float]]


def _as_records(records: Iterable[RecordLike]) -> List[MotifRecord]:
    out: List[MotifRecord] = []
    for rec in records:
        if isinstance(rec, MotifRecord):
            out.append(rec)
        else:
            motif, energy = rec
            out.append(MotifRecord(str(motif), float(energy)))
    return out


def _where(rec: MotifRecord, index: int) -> Optional[int]:
    # File line when known, else the 1-based record index
    return rec.line_number if rec.line_number is not None else index


def _order_records(
    records: List[MotifRecord],
    order: str,
    source: Optional[str | Path],
) -> List[MotifRecord]:
    if order == "trust":
        return records
    if order == "sort":
        return sorted(records, key=lambda r: -r.energy)

    for i in range(1, len(records)):
        prev, cur = records[i - 1], records[i]
        if cur.energy > prev.energy:
            raise ParseError(
                f"table is not in descending energy order ({cur.energy} follows {prev.energy}); "
                "sort it or use order='sort'",
                line_number=_where(cur, i + 1),
                line=f"{cur.motif} {cur.energy}",
                path=source,
            )
    return records


def build_motif_table(
    receptor: str,
    records: Iterable[RecordLike],
    *,
    order: str = "error",
    source: Optional[str | Path] = None,
) -> MotifTable:
    """Build a MotifTable from rank-ordered (motif, energy) records.

    Parameters
    ----------
    receptor:
        Label carried into the table and scan results.
    records:
        (motif, energy) pairs or MotifRecord, highest energy first.
    order:
        How the descending-energy precondition is enforced:
        'error' (verify, fail on the first increase), 'sort' (stable sort
        by descending energy) or 'trust' (use input order as is).
    source:
        File the records came from, used in error messages only.

    Notes
    -----
    The motif length is taken from the first record; any record of another
    length is a ParseError. When two motifs share a reverse complement, the
    later record overwrites the earlier one in the antisense mappings.
    """
    if order not in ORDER_MODES:
        raise ValueError(f"order must be one of {ORDER_MODES}, got '{order}'")

    recs = _as_records(records)
    if not recs:
        raise ParseError("table contains no motifs", path=source)

    length = len(recs[0].motif)
    for i, rec in enumerate(recs, start=1):
        if not rec.motif:
            raise ParseError("empty motif", line_number=_where(rec, i), path=source)
        if len(rec.motif) != length:
            raise ParseError(
                f"motif length {len(rec.motif)} differs from the first motif's length {length}",
                line_number=_where(rec, i),
                line=f"{rec.motif} {rec.energy}",
                path=source,
            )

    recs = _order_records(recs, order, source)

    sense_energy: Dict[str, float] = {}
    sense_prob: Dict[str, float] = {}
    anti_energy: Dict[str, float] = {}
    anti_prob: Dict[str, float] = {}

    n_kmers = 4**length
    for rank, rec in enumerate(recs, start=1):
        prob = 1.0 - rank / n_kmers
        sense_energy[rec.motif] = rec.energy
        sense_prob[rec.motif] = prob
        rc = reverse_complement(rec.motif)
        anti_energy[rc] = rec.energy
        anti_prob[rc] = prob

    if len(sense_energy) < len(recs):
        _LOG.warning("%s: %d duplicated motif(s); later entries kept", receptor, len(recs) - len(sense_energy))

    _LOG.info("Loaded %d motifs of length %d for receptor %s", len(sense_energy), length, receptor)
    return MotifTable(
        receptor=receptor,
        motif_length=length,
        sense_energy=sense_energy,
        sense_probability=sense_prob,
        antisense_energy=anti_energy,
        antisense_probability=anti_prob,
    )


def load_motif_table(
    path: str | Path,
    receptor: Optional[str] = None,
    *,
    order: str = "error",
) -> MotifTable:
    """Read a motif table file and build its MotifTable.

    `receptor` defaults to the file name without extension.
    """
    path = Path(path)
    records = read_motif_table(path)
    return build_motif_table(receptor or path.stem, records, order=order, source=path)

