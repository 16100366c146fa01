"""Classification oracle port and adapters."""

from ledgerflow.oracle.base import ClassificationOracle
from ledgerflow.oracle.file_oracle import FileOracle

__all__ = ["ClassificationOracle", "FileOracle"]
