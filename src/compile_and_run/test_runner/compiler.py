"""
Compiler Invoker - compile the source file once before any test runs
"""
import logging

from ..core.config import RunConfig
from ..core.console import StatusConsole
from ..core.models.toolchain import describe_command
from ..core.process import run_command


class CompilationError(Exception):
    """Compile command exited with a non-zero status"""

    def __init__(self, message: str = "Compilation Error", returncode: int = 1):
        super().__init__(message)
        self.returncode = returncode


class Compiler:
    """
    Compile the source file with its toolchain

    The compiler inherits this process's stdin/stdout/stderr so its
    diagnostics reach the terminal directly.
    """

    def __init__(self, config: RunConfig, console: StatusConsole):
        self.config = config
        self.console = console
        self.logger = logging.getLogger(__name__)

    def compile(self) -> None:
        """
        Run the compile command

        Raises:
            CompilationError: if the compiler exits non-zero
        """
        source = self.config.source_file
        command = self.config.toolchain.compile_command(source)

        if not command:
            # Interpreted languages without a build step
            self.logger.info(f"No compile step for {source.name}")
            self.console.success("Compiled")
            self.console.blank()
            return

        self.console.info(f"Compiling {source.path} with '{describe_command(command)}'...")
        result = run_command(command, cwd=self.config.work_dir)

        if not result.success:
            self.logger.error(f"✗ Compilation failed with exit code {result.returncode}")
            raise CompilationError(returncode=result.returncode)

        self.logger.info(f"✓ Compilation successful: {source.name}")
        self.console.success("Compiled")
        self.console.blank()
