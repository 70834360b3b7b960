"""
Toolchain models - source files and their compile/run command templates
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple
import shlex


@dataclass(frozen=True)
class SourceFile:
    """A solution source file given on the command line"""
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def basename(self) -> str:
        """File name without its extension (`sum.cpp` -> `sum`)"""
        return self.path.stem

    @property
    def extension(self) -> str:
        return self.path.suffix.lower()


@dataclass(frozen=True)
class Toolchain:
    """
    Compile and run command templates for one language

    Templates are argument lists; `{source}` and `{basename}` are replaced
    with the source file path and its base name. An empty compile template
    is a no-op that always succeeds.
    """
    name: str
    compile_template: Tuple[str, ...] = field(default_factory=tuple)
    run_template: Tuple[str, ...] = field(default_factory=tuple)

    def compile_command(self, source: SourceFile) -> List[str]:
        return self._render(self.compile_template, source)

    def run_command(self, source: SourceFile) -> List[str]:
        return self._render(self.run_template, source)

    @staticmethod
    def _render(template: Tuple[str, ...], source: SourceFile) -> List[str]:
        return [
            part.format(source=str(source.path), basename=source.basename)
            for part in template
        ]


def describe_command(command: List[str]) -> str:
    """Render an argument list the way a shell user would type it"""
    return shlex.join(command)
