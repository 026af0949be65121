import io

import numpy as np
import pandas as pd

from tfbsscan.motifs import build_motif_table
from tfbsscan.report import HEADER, find_sites, score_track, write_sites, write_track
from tfbsscan.scan import ScanResult, scan_sequence


def _result(sense, anti, length=8, name="chrT"):
    sense = np.asarray(sense, dtype=np.float64)
    anti = np.asarray(anti, dtype=np.float64)
    return ScanResult(
        seq_name=name,
        receptor="REC",
        motif_length=length,
        sense_energy=np.zeros_like(sense),
        sense_probability=sense,
        antisense_energy=np.zeros_like(anti),
        antisense_probability=anti,
    )


def _render(sites):
    buf = io.StringIO()
    write_sites(sites, buf)
    return buf.getvalue()


def test_single_strand_hit_emits_one_row():
    sites = find_sites(_result([0.999985, 0.1], [0.0, 0.2]))
    assert len(sites) == 1
    row = sites.iloc[0]
    assert (row["start"], row["end"], row["strand"]) == (1, 8, "+")


def test_both_strands_emit_two_rows_plus_first():
    sites = find_sites(_result([0.1, 0.9, 0.0], [0.7, 0.6, 0.0]))
    assert sites[["start", "end", "strand"]].values.tolist() == [
        [1, 8, "-"],
        [2, 9, "+"],
        [2, 9, "-"],
    ]
    # positional order, not score order
    assert sites["score"].tolist() == [0.7, 0.9, 0.6]


def test_threshold_is_strict():
    sites = find_sites(_result([0.5, 0.51], [0.5, 0.0]))
    assert sites["start"].tolist() == [2]
    assert find_sites(_result([0.5, 0.51], [0.5, 0.0]), threshold=0.6).empty


def test_write_sites_format():
    text = _render(find_sites(_result([0.999985, 0.0, 0.75], [0.0, 0.0, 0.6]), threshold=0.5))
    assert text == (
        "seqname\tstart\tend\tscore\tstrand\n"
        "chrT\t1\t8\t1.00\t+\n"
        "chrT\t3\t10\t0.75\t+\n"
        "chrT\t3\t10\t0.60\t-\n"
    )


def test_empty_result_writes_header_only():
    sites = find_sites(_result([], []))
    assert list(sites.columns) == HEADER
    assert _render(sites) == "seqname\tstart\tend\tscore\tstrand\n"


def test_pipeline_on_example_sequence():
    table = build_motif_table("REC", [("AAAAAAAA", 10.0), ("TTTTTTTT", 5.0)])
    text = _render(find_sites(scan_sequence(table, "AAAAAAAAGG", seq_name="chrT")))
    assert text.splitlines() == [
        "seqname\tstart\tend\tscore\tstrand",
        "chrT\t1\t8\t1.00\t+",
        "chrT\t1\t8\t1.00\t-",
    ]


def test_score_track(tmp_path):
    res = _result([0.9, 0.0], [0.0, 0.3], length=4)
    track = score_track(res)
    assert track["start"].tolist() == [1, 2]
    assert track["end"].tolist() == [4, 5]
    assert track["antisense_probability"].tolist() == [0.0, 0.3]

    path = write_track(res, tmp_path / "track.tsv")
    back = pd.read_csv(path, sep="\t")
    assert list(back.columns) == list(track.columns)
    assert len(back) == 2
