"""Tab-separated output of labelled distance matrices."""

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from distmat.core.exceptions import OutputError

logger = logging.getLogger(__name__)


def write_distance_matrix(
    frame: pd.DataFrame,
    output_file: Union[str, Path],
    invocation: Optional[str] = None,
    float_format: Optional[str] = None
) -> Path:
    """
    Write a labelled distance matrix as TSV.

    Layout:
        # <invocation>
        #
        seqs<TAB>name1<TAB>name2...
        name1<TAB>value<TAB>value...

    Args:
        frame: Square matrix labelled with sequence names
        output_file: Output file path
        invocation: Command line recorded in the first comment line
        float_format: Optional printf-style format for percentages

    Returns:
        Path to generated file

    Raises:
        OutputError: Matrix could not be formatted or the file could not be written
    """
    output_file = Path(output_file)

    try:
        table = frame.to_csv(
            sep='\t',
            index=True,
            index_label='seqs',
            float_format=float_format,
            lineterminator='\n'
        )
    except (TypeError, ValueError) as e:
        raise OutputError(f"Couldn't format matrix for {output_file}: {e}", path=output_file)

    try:
        with open(output_file, 'w', newline='') as f:
            f.write(f"# {invocation or ''}\n")
            f.write("#\n")
            f.write(table)
    except OSError as e:
        raise OutputError(f"Couldn't create {output_file}: {e}", path=output_file)

    logger.info(f"Wrote {frame.shape[0]} x {frame.shape[1]} matrix to {output_file}")
    return output_file
