"""tfbsscan

Scan a DNA sequence against a precomputed table of oligonucleotide motifs and
their binding energies for one receptor (transcription factor), and report
putative transcription-factor binding sites (TFBS) on both strands.

The pipeline is:
- read one sequence from a FASTA file
- build a MotifTable from a rank-ordered (motif, energy) table
- scan every window on the sense and antisense strands
- report windows whose rank-derived probability exceeds a threshold
"""

from importlib.metadata import version as _version

from .errors import ConfigError, ParseError, TfbsScanError
from .motifs import MotifTable, build_motif_table, load_motif_table
from .report import find_sites, write_sites
from .scan import ScanResult, scan_sequence
from .seqs import reverse_complement

__all__ = [
    "__version__",
    "ConfigError",
    "MotifTable",
    "ParseError",
    "ScanResult",
    "TfbsScanError",
    "build_motif_table",
    "find_sites",
    "load_motif_table",
    "reverse_complement",
    "scan_sequence",
    "write_sites",
]

try:
    __version__ = _version("tfbsscan")
except Exception:  # pragma: no cover
    __version__ = "0.0.0"
