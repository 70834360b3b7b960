"""
Batch Runner - discover input files, run the program on each and report
"""
import logging
import re
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from ..core.config import RunConfig
from ..core.console import StatusConsole
from ..core.models.run_result import RunResult, Verdict
from ..core.process import run_command
from ..core.toolchain_selector import ARTIFACT_EXTENSIONS
from ..validator.output_validator import OutputValidator

logger = logging.getLogger(__name__)

# Always excluded, whatever the toolchain table holds
BUILTIN_EXCLUDED_EXTENSIONS = (".java", ".class", ".cpp", ".go")

_LAST_IN = re.compile(r"(.*)in")


def matching_output_file(input_name: str) -> str:
    """
    Expected-output name for an input file: the last "in" becomes "out"

    `sum.1.in` -> `sum.1.out`, `inwin.in` -> `inwin.out`
    """
    return _LAST_IN.sub(r"\1out", input_name, count=1)


def is_executable_file(path: Path) -> bool:
    """Ask the `file` utility whether `path` is an executable"""
    result = run_command(
        ["file", "-b", str(path)],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    return result.success and "executable" in result.stdout


def _never_executable(path: Path) -> bool:
    return False


def matches_filters(name: str, filters: Sequence[str]) -> bool:
    """True if any filter regexp matches somewhere in `name`; no filters match all"""
    if not filters:
        return True
    return any(re.search(pattern, name) for pattern in filters)


def discover_input_files(
    work_dir: Path,
    filters: Sequence[str] = (),
    excluded_extensions: Iterable[str] = BUILTIN_EXCLUDED_EXTENSIONS,
    is_executable: Optional[Callable[[Path], bool]] = None,
) -> List[Path]:
    """
    Find input files in `work_dir`

    A candidate is a regular file whose name contains "in". Excluded:
    names containing "out", names with a source/artifact extension and
    files the `file` utility reports as executables.

    Args:
        work_dir: Directory to scan (not recursive)
        filters: Regexps; a file is kept if any of them matches its name
        excluded_extensions: Source and artifact extensions to skip
        is_executable: Executable probe (default: the `file` utility)

    Returns:
        Input file paths in directory enumeration order
    """
    excluded = tuple(ext.lower() for ext in excluded_extensions)

    if is_executable is None:
        if shutil.which("file"):
            is_executable = is_executable_file
        else:
            logger.debug("`file` utility not found, executables are not filtered out")
            is_executable = _never_executable

    inputs: List[Path] = []
    for path in work_dir.iterdir():
        name = path.name
        if "in" not in name or not path.is_file():
            continue
        if "out" in name:
            logger.debug(f"Skipping {name}: looks like an output file")
            continue
        if name.lower().endswith(excluded):
            logger.debug(f"Skipping {name}: source or build artifact")
            continue
        if is_executable(path):
            logger.debug(f"Skipping {name}: executable binary")
            continue
        if not matches_filters(name, filters):
            continue
        inputs.append(path)

    return inputs


class BatchRunner:
    """
    Run the compiled program against every input file

    Each input gets one verdict line; nothing is aggregated.
    """

    def __init__(
        self,
        config: RunConfig,
        console: StatusConsole,
        validator: Optional[OutputValidator] = None,
        is_executable: Optional[Callable[[Path], bool]] = None,
    ):
        self.config = config
        self.console = console
        self.validator = validator or OutputValidator()
        self.is_executable = is_executable
        self.logger = logging.getLogger(__name__)

    def excluded_extensions(self) -> List[str]:
        """Built-in exclusions plus every source extension the table knows"""
        extensions = list(BUILTIN_EXCLUDED_EXTENSIONS) + list(ARTIFACT_EXTENSIONS)
        extensions.extend(self.config.toolchains.keys())
        return sorted(set(extensions))

    def input_files(self) -> List[Path]:
        return discover_input_files(
            self.config.work_dir,
            filters=self.config.filters,
            excluded_extensions=self.excluded_extensions(),
            is_executable=self.is_executable,
        )

    def run_all(self) -> List[RunResult]:
        """Run every discovered input file, in order"""
        if self.config.filters:
            self.console.info(f"Filtering files with these regexps: {','.join(self.config.filters)}")

        self.config.output_dir.mkdir(parents=True, exist_ok=True)

        results: List[RunResult] = []
        inputs = self.input_files()
        self.logger.info(f"Found {len(inputs)} input files in {self.config.work_dir}")

        for input_file in inputs:
            results.append(self.run_one(input_file))
        return results

    def run_one(self, input_file: Path) -> RunResult:
        """Execute the program with one input file and report the verdict"""
        name = input_file.name
        output_file = self.config.captured_output_path(name)
        command = self.config.toolchain.run_command(self.config.source_file)

        self.console.info(f"Running with '{name}'...")

        try:
            with open(input_file, "rb") as stdin, open(output_file, "wb") as stdout:
                start_time = datetime.now()
                process = run_command(command, cwd=self.config.work_dir, stdin=stdin, stdout=stdout)
                execution_time = datetime.now() - start_time
        except OSError as e:
            self.logger.error(f"✗ Cannot run with {name}: {e}")
            self.console.error(f"Runtime error with '{name}'")
            return RunResult(
                input_file=input_file,
                captured_output=output_file,
                verdict=Verdict.RUNTIME_ERROR,
            )

        result = RunResult(
            input_file=input_file,
            captured_output=output_file,
            verdict=Verdict.RUNTIME_ERROR,
            execution_time=execution_time,
            exit_code=process.returncode,
        )
        elapsed = f"{result.elapsed_seconds:.4f} sec"

        if not process.success:
            self.console.error(f"Runtime error with '{name}'")
            return result

        expected = input_file.parent / matching_output_file(name)
        if not expected.is_file():
            result.verdict = Verdict.NO_REFERENCE
            self.console.warning(f"No errors ({elapsed})")
            with open(output_file, encoding="utf-8", errors="replace", newline="") as f:
                self.console.raw(f.read())
            return result

        result.expected_output = expected
        diff = self.validator.compare(output_file, expected)
        result.diff = diff.stdout
        self.console.raw(diff.stdout)
        self.console.raw(diff.stderr)

        if diff.success:
            result.verdict = Verdict.MATCH
            self.console.success(f"Output matches {expected.name} ({elapsed})")
        else:
            result.verdict = Verdict.MISMATCH
            self.console.error(f"There are differences with {expected.name} ({elapsed})")
        return result
