import pytest

from distmat.core.exceptions import OutputError
from distmat.modules.assembly import condensed_to_matrix, matrix_to_frame
from distmat.modules.output import write_distance_matrix


NAMES = ["seq1", "seq2", "seq3"]


def test_write_hamming_matrix(tmp_path):
    frame = matrix_to_frame(condensed_to_matrix([5, 11, 8], 0), NAMES)
    out = write_distance_matrix(frame, tmp_path / "out.txt", invocation="distmat toy.fa -m hamming")
    assert out.read_text().splitlines() == [
        "# distmat toy.fa -m hamming",
        "#",
        "seqs\tseq1\tseq2\tseq3",
        "seq1\t0\t5\t11",
        "seq2\t5\t0\t8",
        "seq3\t11\t8\t0",
    ]

def test_write_with_float_format(tmp_path):
    frame = matrix_to_frame(condensed_to_matrix([700 / 12, 50.0, 25.0], 100.0), NAMES)
    out = write_distance_matrix(frame, tmp_path / "out.txt", float_format="%.2f")
    lines = out.read_text().splitlines()
    assert lines[0] == "# "
    assert lines[3] == "seq1\t100.00\t58.33\t50.00"

def test_unwritable_destination(tmp_path):
    frame = matrix_to_frame(condensed_to_matrix([1], 0), ["a", "b"])
    with pytest.raises(OutputError):
        write_distance_matrix(frame, tmp_path / "no" / "such" / "dir" / "out.txt")

@pytest.mark.parametrize("float_format", ["%q", "%s %s", "no placeholder"])
def test_bad_float_format_leaves_no_file(tmp_path, float_format):
    frame = matrix_to_frame(condensed_to_matrix([50.0, 25.0, 12.5], 100.0), NAMES)
    out = tmp_path / "out.txt"
    with pytest.raises(OutputError) as excinfo:
        write_distance_matrix(frame, out, invocation="x", float_format=float_format)
    assert excinfo.value.path == out
    assert not out.exists()
