"""Reading and validation of aligned FASTA input."""

import logging
from collections import Counter
from pathlib import Path
from typing import List, Sequence, Union

from Bio import SeqIO

from distmat.core.types import SequenceRecord, ValidationResult
from distmat.core.exceptions import InputFileError

logger = logging.getLogger(__name__)


def read_fasta(fasta_file: Union[str, Path]) -> List[SequenceRecord]:
    """
    Read aligned sequences from a FASTA file.

    The record name is the first word of the header line; whitespace inside
    sequence lines is dropped.

    Args:
        fasta_file: Path to the alignment

    Returns:
        Records in file order

    Raises:
        InputFileError: File missing, unreadable, malformed or empty
    """
    fasta_file = Path(fasta_file)
    records = []

    try:
        with open(fasta_file, 'r') as handle:
            for record in SeqIO.parse(handle, "fasta"):
                records.append(SequenceRecord(
                    name=record.id,
                    sequence="".join(str(record.seq).split()),
                    description=record.description
                ))
    except OSError as e:
        raise InputFileError(f"Couldn't open {fasta_file}: {e}", path=fasta_file)
    except ValueError as e:
        raise InputFileError(f"Couldn't parse {fasta_file} as FASTA: {e}", path=fasta_file)

    if not records:
        raise InputFileError(f"No FASTA records found in {fasta_file}", path=fasta_file)

    logger.info(f"Read {len(records)} sequences from {fasta_file}")
    return records


def validate_alignment(
    records: Sequence[SequenceRecord],
    require_equal_length: bool = True
) -> ValidationResult:
    """
    Check that records form a usable alignment.

    Args:
        records: Sequences to check
        require_equal_length: Treat differing lengths as an error rather
            than a warning

    Returns:
        ValidationResult with validation status and details
    """
    errors = []
    warnings = []
    details = {"n_sequences": len(records)}

    if len(records) < 2:
        warnings.append(f"Only {len(records)} sequence(s) given, matrix has no pairwise values")

    duplicated = sorted(name for name, count in Counter(r.name for r in records).items() if count > 1)
    if duplicated:
        errors.append(f"Duplicate sequence names: {', '.join(duplicated)}")

    empty = [r.name for r in records if len(r) == 0]
    if empty:
        warnings.append(f"Empty sequences: {', '.join(empty)}")

    lengths = sorted(set(len(r) for r in records))
    if len(lengths) > 1:
        message = (
            f"Sequences are not aligned: lengths range from {lengths[0]} to {lengths[-1]}; "
            "comparisons stop at the shorter sequence"
        )
        if require_equal_length:
            errors.append(message)
        else:
            warnings.append(message)
    elif lengths:
        details["alignment_length"] = lengths[0]

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
        details=details
    )
