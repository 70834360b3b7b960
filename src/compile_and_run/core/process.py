"""
Process invocation - run one external command and return a ProcessResult
"""
import logging
import subprocess
from pathlib import Path
from typing import IO, List, Optional, Union

from .models.run_result import ProcessResult
from .models.toolchain import describe_command

logger = logging.getLogger(__name__)

# Shell conventions for "command not found" and "not executable"
COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126

Stream = Optional[Union[int, IO]]


def run_command(
    command: List[str],
    cwd: Optional[Path] = None,
    stdin: Stream = None,
    stdout: Stream = None,
    stderr: Stream = None,
) -> ProcessResult:
    """
    Run a command synchronously

    Streams left as None are inherited from the parent; pass
    subprocess.PIPE to capture them into the result.

    Args:
        command: Argument list
        cwd: Working directory for the child
        stdin, stdout, stderr: Passed through to subprocess.run

    Returns:
        ProcessResult with exit code and any captured output
    """
    logger.debug(f"Running: {describe_command(command)}")

    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
        )
    except FileNotFoundError as e:
        logger.error(f"✗ Command not found: {command[0]} ({e})")
        return ProcessResult(returncode=COMMAND_NOT_FOUND, stderr=str(e))
    except PermissionError as e:
        logger.error(f"✗ Command not executable: {command[0]} ({e})")
        return ProcessResult(returncode=COMMAND_NOT_EXECUTABLE, stderr=str(e))

    logger.debug(f"Exit code {result.returncode}: {describe_command(command)}")
    return ProcessResult(
        returncode=result.returncode,
        stdout=_decode(result.stdout),
        stderr=_decode(result.stderr),
    )


def _decode(data: Optional[bytes]) -> str:
    # No newline translation: "\r\n" in captured output is kept
    return data.decode("utf-8", errors="replace") if data else ""
