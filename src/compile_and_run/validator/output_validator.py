"""
Output Validator - So sánh captured output với expected output file
"""
import logging
import subprocess
from pathlib import Path

from ..core.models.run_result import ProcessResult
from ..core.process import run_command


class OutputValidator:
    """
    Byte-level comparison using the `diff` utility

    No whitespace or line-ending normalisation is applied.
    """

    def __init__(self, diff_path: str = "diff"):
        self.diff_path = diff_path
        self.logger = logging.getLogger(__name__)

    def compare(self, actual: Path, expected: Path) -> ProcessResult:
        """
        Diff actual output against the expected output file

        Args:
            actual: Captured program output
            expected: Reference output file

        Returns:
            ProcessResult whose stdout is the diff; success means identical
        """
        result = run_command(
            [self.diff_path, str(actual), str(expected)],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        if result.returncode > 1:
            # diff exits 2 on trouble (missing file, unreadable input)
            self.logger.error(f"✗ diff failed: {result.stderr.strip()}")
        return result
