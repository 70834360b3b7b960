"""
Run result models - outcome of one program execution against one input file
"""
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class Verdict(Enum):
    """Per-input outcome"""
    RUNTIME_ERROR = "runtime_error"
    NO_REFERENCE = "no_reference"
    MATCH = "match"
    MISMATCH = "mismatch"


@dataclass
class ProcessResult:
    """Exit status and captured streams of a finished child process"""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


@dataclass
class RunResult:
    """Kết quả chạy chương trình với một input file"""
    input_file: Path
    captured_output: Path
    verdict: Verdict
    execution_time: timedelta = field(default_factory=lambda: timedelta(0))
    expected_output: Optional[Path] = None
    diff: str = ""
    exit_code: Optional[int] = None

    @property
    def elapsed_seconds(self) -> float:
        return self.execution_time.total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "input_file": str(self.input_file),
            "captured_output": str(self.captured_output),
            "verdict": self.verdict.value,
            "execution_time_ms": self.elapsed_seconds * 1000,
            "expected_output": str(self.expected_output) if self.expected_output else None,
            "diff": self.diff,
            "exit_code": self.exit_code,
        }
