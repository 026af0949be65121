import random

import numpy as np
import pytest

from tfbsscan.motifs import build_motif_table
from tfbsscan.scan import scan_sequence


@pytest.fixture
def table():
    return build_motif_table("REC", [("AAAAAAAA", 10.0), ("TTTTTTTT", 5.0)])


def test_scan_offsets_and_defaults(table):
    res = scan_sequence(table, "AAAAAAAAGG", seq_name="chrT")
    assert len(res) == 3
    assert res.seq_name == "chrT"
    assert res.receptor == "REC"
    assert res.motif_length == 8

    assert res.sense_energy.tolist() == [10.0, 0.0, 0.0]
    assert res.sense_probability[0] == pytest.approx(0.999985, abs=1e-6)
    assert res.antisense_energy.tolist() == [5.0, 0.0, 0.0]
    assert res.antisense_probability[0] == pytest.approx(1 - 2 / 65536)
    assert res.sense_probability[1:].tolist() == [0.0, 0.0]
    assert res.antisense_probability[1:].tolist() == [0.0, 0.0]


def test_scan_antisense_hit(table):
    res = scan_sequence(table, "GTTTTTTTT")
    # window 1 is TTTTTTTT: sense rank 2, antisense carries AAAAAAAA's rank 1
    assert res.sense_energy.tolist() == [0.0, 5.0]
    assert res.antisense_energy.tolist() == [0.0, 10.0]


def test_scan_short_sequence_is_empty(table):
    res = scan_sequence(table, "AAAA")
    assert len(res) == 0
    for arr in (res.sense_energy, res.sense_probability, res.antisense_energy, res.antisense_probability):
        assert arr.shape == (0,)


def test_scan_ambiguous_bases_score_zero(table):
    res = scan_sequence(table, "AAAANAAAA")
    assert res.sense_energy.tolist() == [0.0, 0.0]


def test_scan_does_not_modify_table(table):
    before = dict(table.sense_energy), dict(table.antisense_probability)
    scan_sequence(table, "ACGTACGTACGTAAAAAAAA")
    assert (dict(table.sense_energy), dict(table.antisense_probability)) == before


def _random_table(k=3, seed=1):
    rng = random.Random(seed)
    kmers = sorted({"".join(rng.choice("ACGT") for _ in range(k)) for _ in range(40)})
    energies = sorted((rng.uniform(-5, 5) for _ in kmers), reverse=True)
    return build_motif_table("RND", list(zip(kmers, energies)))


def test_chunked_scan_matches_single_chunk():
    table = _random_table()
    rng = random.Random(7)
    seq = "".join(rng.choice("ACGTN") for _ in range(500))
    whole = scan_sequence(table, seq)
    chunked = scan_sequence(table, seq, chunk_size=7)
    assert len(chunked) == len(seq) - 2
    for name in ("sense_energy", "sense_probability", "antisense_energy", "antisense_probability"):
        np.testing.assert_array_equal(getattr(chunked, name), getattr(whole, name))


def test_parallel_scan_matches_sequential():
    table = _random_table()
    rng = random.Random(11)
    seq = "".join(rng.choice("ACGT") for _ in range(300))
    seq_res = scan_sequence(table, seq)
    par_res = scan_sequence(table, seq, workers=2, chunk_size=50)
    for name in ("sense_energy", "sense_probability", "antisense_energy", "antisense_probability"):
        np.testing.assert_array_equal(getattr(par_res, name), getattr(seq_res, name))


def test_scan_rejects_bad_workers(table):
    with pytest.raises(ValueError):
        scan_sequence(table, "AAAAAAAA", workers=0)
