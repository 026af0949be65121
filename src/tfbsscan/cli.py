"""Scan a chromosome for putative transcription-factor binding sites.

Usage examples:
  # Report sites with probability > 0.5 on both strands
  tfbsscan -chr chrY.fasta -table P10589.csv > sites.tsv

  # Unsorted table, explicit receptor label, 4 processes
  tfbsscan -chr chrY.fasta -table P10589.csv --order sort --receptor P10589 --workers 4

  # Also dump every window's energy/probability
  tfbsscan -chr chrY.fasta -table P10589.csv --out sites.tsv --track chrY.track.tsv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import ConfigError
from .io import read_sequence
from .motifs import ORDER_MODES, load_motif_table
from .report import DEFAULT_THRESHOLD, find_sites, write_sites, write_track
from .scan import DEFAULT_CHUNK_SIZE, scan_sequence
from .utils import ensure_dir

_LOG = logging.getLogger("tfbsscan.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="tfbsscan",
        description=__doc__.splitlines()[0],
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    g_in = ap.add_argument_group("Input")
    g_in.add_argument("-chr", "--chr", dest="chr", type=str, help="Chromosome FASTA file")
    g_in.add_argument(
        "-table",
        "--table",
        dest="table",
        type=str,
        help="Receptor motif/energy table (IMPORTANT: descending energy order)",
    )
    g_in.add_argument("--seq-name", type=str, default=None, help="FASTA record to scan (default: first record)")
    g_in.add_argument("--receptor", type=str, default=None, help="Receptor label (default: table file name)")
    g_in.add_argument(
        "--order",
        choices=list(ORDER_MODES),
        default="error",
        help="Descending-energy check: fail on unsorted tables, sort them, or trust file order",
    )

    g_scan = ap.add_argument_group("Scan")
    g_scan.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD, help="Report probabilities above this")
    g_scan.add_argument("--workers", type=int, default=1, help="Processes used to scan chunks")
    g_scan.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, help="Windows per chunk")
    g_scan.add_argument("--progress", action="store_true", help="Show a progress bar")

    g_out = ap.add_argument_group("Output")
    g_out.add_argument("--out", type=str, default=None, help="Site table path (default: stdout)")
    g_out.add_argument("--track", type=str, default=None, help="Also write all per-window scores to this TSV")
    g_out.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    return ap


def _check_args(args: argparse.Namespace) -> None:
    missing = [flag for flag, value in (("-chr", args.chr), ("-table", args.table)) if not value]
    if missing:
        raise ConfigError(f"missing required option(s): {', '.join(missing)} (use -h for usage)")
    if not 0.0 <= args.threshold <= 1.0:
        raise ConfigError(f"--threshold must be within [0, 1], got {args.threshold}")
    if args.workers < 1:
        raise ConfigError(f"--workers must be >= 1, got {args.workers}")
    if args.chunk_size < 1:
        raise ConfigError(f"--chunk-size must be >= 1, got {args.chunk_size}")


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        _check_args(args)
    except ConfigError as exc:
        ap.print_usage(sys.stderr)
        _LOG.error("tfbsscan: error: %s", exc)
        return 2

    try:
        record = read_sequence(args.chr, name=args.seq_name)
        table = load_motif_table(args.table, receptor=args.receptor, order=args.order)
        result = scan_sequence(
            table,
            record.sequence,
            seq_name=record.name,
            workers=args.workers,
            chunk_size=args.chunk_size,
            progress=args.progress,
        )
        sites = find_sites(result, threshold=args.threshold)

        if args.track:
            ensure_dir(Path(args.track).parent)
            write_track(result, args.track)
            _LOG.info("Wrote score track to: %s", args.track)

        if args.out:
            ensure_dir(Path(args.out).parent)
            write_sites(sites, args.out)
            _LOG.info("Wrote %d site(s) to: %s", len(sites), args.out)
        else:
            write_sites(sites)
    except (OSError, ValueError) as exc:
        _LOG.error("tfbsscan: error: %s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
