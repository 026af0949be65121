import pytest


@pytest.fixture
def table_file(tmp_path):
    """Two 8-mers, highest energy first."""
    path = tmp_path / "REC1.txt"
    path.write_text("AAAAAAAA 10.0\nTTTTTTTT 5.0\n")
    return path


@pytest.fixture
def fasta_file(tmp_path):
    path = tmp_path / "chrT.fasta"
    path.write_text(">chrT test chromosome\nAAAAAAAA\nGG\n")
    return path
