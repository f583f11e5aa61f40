"""Custom exceptions for distance matrix computation."""

import time
from typing import Optional, List
from pathlib import Path


class DistmatError(Exception):
    """Base exception for distmat errors."""

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        self.stage = stage
        self.timestamp = time.time()
        super().__init__(message)


class InputFileError(DistmatError):
    """Input alignment could not be opened, read or parsed."""

    def __init__(self, message: str, path: Optional[Path] = None,
                 stage: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message, stage)


class MatrixShapeError(DistmatError):
    """Condensed vector length does not correspond to any square matrix."""

    def __init__(self, message: str, length: int, stage: Optional[str] = None) -> None:
        self.length = length
        super().__init__(message, stage)


class ValidationError(DistmatError):
    """Data validation failed."""

    def __init__(self, message: str, errors: Optional[List[str]] = None,
                 stage: Optional[str] = None) -> None:
        self.errors = errors or []
        super().__init__(message, stage)


class ConfigurationError(DistmatError):
    """Configuration error."""

    def __init__(self, message: str, config_path: Optional[Path] = None,
                 stage: Optional[str] = None) -> None:
        self.config_path = config_path
        super().__init__(message, stage)


class OutputError(DistmatError):
    """Result file could not be written."""

    def __init__(self, message: str, path: Optional[Path] = None,
                 stage: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message, stage)
