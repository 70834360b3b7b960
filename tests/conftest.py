import io
import shutil
import sys
from pathlib import Path

import pytest
from rich.console import Console

from compile_and_run.core.config import RunConfig
from compile_and_run.core.console import StatusConsole
from compile_and_run.core.models.toolchain import SourceFile, Toolchain
from compile_and_run.core.toolchain_selector import build_toolchain_table

SUM_PY = "a, b = map(int, input().split())\nprint(a + b)\n"

SUM_CPP = """#include <iostream>
int main() {
    int a, b;
    std::cin >> a >> b;
    std::cout << a + b << std::endl;
    return 0;
}
"""

PYTHON_TOOLCHAIN = Toolchain(
    name="python",
    compile_template=(),
    run_template=(sys.executable, "{source}"),
)

requires_diff = pytest.mark.skipif(shutil.which("diff") is None, reason="diff not installed")
requires_gpp = pytest.mark.skipif(shutil.which("g++") is None, reason="g++ not installed")
requires_file = pytest.mark.skipif(shutil.which("file") is None, reason="file not installed")


class CapturedConsole(StatusConsole):
    """StatusConsole writing plain text into a buffer"""

    def __init__(self):
        self.buffer = io.StringIO()
        super().__init__(Console(file=self.buffer, width=200, highlight=False))

    @property
    def text(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture
def console():
    return CapturedConsole()


@pytest.fixture
def make_config(tmp_path):
    """Build a RunConfig rooted at tmp_path using the python toolchain"""

    def _make(source_name="sum.py", filters=(), toolchain=PYTHON_TOOLCHAIN, extension=".py"):
        return RunConfig(
            source_file=SourceFile(tmp_path / source_name),
            filters=tuple(filters),
            work_dir=tmp_path,
            output_dir=tmp_path / "captures",
            toolchains=build_toolchain_table({extension: toolchain}),
        )

    return _make


def write(path: Path, content: str) -> Path:
    path.write_text(content)
    return path
