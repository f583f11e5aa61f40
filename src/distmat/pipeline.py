"""Main pipeline orchestration module."""

import logging
import time
from pathlib import Path
from typing import Dict, Any, Union, Optional, Literal, Sequence

import numpy as np
import pandas as pd

from distmat import __version__
from distmat.core.types import EngineConfig, SequenceRecord
from distmat.core.exceptions import ValidationError
from distmat.modules.fasta import read_fasta, validate_alignment
from distmat.modules.metrics import Metric
from distmat.modules.engine import PairwiseEngine
from distmat.modules.assembly import condensed_to_matrix, matrix_to_frame
from distmat.modules.output import write_distance_matrix
from distmat.utils.config import engine_config_from

logger = logging.getLogger(__name__)


def compute_distance_matrix(
    records: Sequence[SequenceRecord],
    metric: Union[Metric, str],
    engine_config: Optional[EngineConfig] = None
) -> pd.DataFrame:
    """
    Compute a labelled all-pairs matrix for a set of aligned sequences.

    Args:
        records: Aligned sequences
        metric: Metric member or its name
        engine_config: Concurrency policy for the pairwise engine

    Returns:
        Square DataFrame indexed and labelled by sequence name
    """
    metric = Metric.from_name(metric)
    names = [record.name for record in records]

    if not records:
        return matrix_to_frame(np.empty((0, 0), dtype=metric.dtype), names)

    engine = PairwiseEngine(engine_config)
    condensed = engine.compute(records, metric)
    matrix = condensed_to_matrix(condensed, metric.diag_fill)
    return matrix_to_frame(matrix, names)


def run_distmat_pipeline(
    input_file: Union[str, Path],
    output_file: Union[str, Path],
    config: Dict[str, Any],
    invocation: Optional[str] = None,
    validate_inputs: bool = True,
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
) -> Dict[str, Any]:
    """
    Read an alignment, compute its distance matrix and write it as TSV.

    Args:
        input_file: Aligned FASTA file
        output_file: Destination TSV file
        config: Complete configuration dictionary
        invocation: Command line recorded in the output header
        validate_inputs: Whether to validate the alignment before scoring
        log_level: Logging verbosity level

    Returns:
        Dictionary containing run results and metadata
    """
    input_file = Path(input_file)
    output_file = Path(output_file)

    log_file = config.get("logging", {}).get("file")
    setup_logging(log_level, Path(log_file) if log_file else None)

    start_time = time.time()
    results = {
        "start_time": start_time,
        "distmat_version": __version__,
        "config": config
    }

    try:
        logger.info(f"Using input file: {input_file}")
        records = read_fasta(input_file)

        if validate_inputs:
            require_equal = config.get("alignment", {}).get("require_equal_length", True)
            validation_result = validate_alignment(records, require_equal_length=require_equal)
            for warning in validation_result.warnings:
                logger.warning(warning)
            if not validation_result.is_valid:
                raise ValidationError(
                    f"Input validation failed: {validation_result.errors}",
                    errors=validation_result.errors,
                    stage="validation"
                )
            logger.info("Input validation passed")

        metric = Metric.from_name(config.get("distance", {}).get("method", "identity"))
        engine_config = engine_config_from(config)
        engine = PairwiseEngine(engine_config)
        logger.info(f"nthread: {engine.threads}")
        logger.info(f"Distance method: {metric.value}")

        condensed = engine.compute(records, metric)
        matrix = condensed_to_matrix(condensed, metric.diag_fill)
        frame = matrix_to_frame(matrix, [record.name for record in records])

        logger.info(f"Writing output file: {output_file}")
        write_distance_matrix(
            frame,
            output_file,
            invocation=invocation,
            float_format=config.get("output", {}).get("float_format")
        )

        end_time = time.time()
        results.update({
            "n_sequences": len(records),
            "n_pairs": len(condensed),
            "method": metric.value,
            "threads": engine.threads,
            "output_file": str(output_file),
            "end_time": end_time,
            "runtime_seconds": end_time - start_time,
            "runtime_formatted": f"{end_time - start_time:.2f} seconds"
        })

        logger.info(f"Completed {len(condensed)} comparisons in {results['runtime_formatted']}")
        return results

    except Exception as e:
        end_time = time.time()
        results["end_time"] = end_time
        results["runtime_seconds"] = end_time - start_time
        results["error"] = str(e)

        logger.error(f"Distance matrix computation failed: {e}")
        raise


def setup_logging(level: str, log_file: Optional[Path] = None) -> None:
    """
    Setup logging configuration.

    Args:
        level: Logging level
        log_file: Optional log file path
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file) if log_file else logging.NullHandler()
        ]
    )
