import pytest

from distmat.core.exceptions import InputFileError
from distmat.core.types import SequenceRecord
from distmat.modules.fasta import read_fasta, validate_alignment


def _write(path, text: str):
    with open(path, "wt") as f: f.write(text)


def test_read_fasta(test_data_dir, toy_sequences):
    records = read_fasta(test_data_dir / "toy.fa")
    assert [r.name for r in records] == ["seq1", "seq2", "seq3"]
    assert [r.sequence for r in records] == toy_sequences
    assert records[0].description == "seq1 first toy sequence"

def test_read_fasta_strips_whitespace(tmp_path):
    fa = tmp_path / "x.fa"
    _write(fa, ">a desc\nAC GT\n  --AC  \n>b\nACGT--AC\n")
    records = read_fasta(fa)
    assert records[0].sequence == "ACGT--AC"
    assert records[1].sequence == "ACGT--AC"

def test_missing_file(tmp_path):
    missing = tmp_path / "missing.fa"
    with pytest.raises(InputFileError) as excinfo:
        read_fasta(missing)
    assert excinfo.value.path == missing
    assert "missing.fa" in str(excinfo.value)

def test_file_without_records(tmp_path):
    fa = tmp_path / "empty.fa"
    _write(fa, "")
    with pytest.raises(InputFileError):
        read_fasta(fa)


# ---------- Validation ----------

def test_validate_aligned_records(toy_sequences):
    records = [SequenceRecord(f"s{i}", s) for i, s in enumerate(toy_sequences)]
    result = validate_alignment(records)
    assert result.is_valid
    assert result.details["alignment_length"] == 16
    assert result.details["n_sequences"] == 3

def test_validate_unequal_lengths():
    records = [SequenceRecord("a", "ACGT"), SequenceRecord("b", "ACG")]
    strict = validate_alignment(records)
    assert not strict.is_valid
    assert "not aligned" in strict.errors[0]

    lenient = validate_alignment(records, require_equal_length=False)
    assert lenient.is_valid
    assert any("not aligned" in w for w in lenient.warnings)

def test_validate_duplicate_names():
    records = [SequenceRecord("a", "ACGT"), SequenceRecord("a", "ACGA")]
    result = validate_alignment(records)
    assert not result.is_valid
    assert "Duplicate" in result.errors[0]

def test_validate_single_sequence_is_a_warning():
    result = validate_alignment([SequenceRecord("a", "ACGT")])
    assert result.is_valid
    assert result.warnings
