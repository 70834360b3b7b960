"""
Toolchain Selector - chọn compile/run command theo extension của source file
"""
import logging
from typing import Dict, Mapping, Optional

from .models.toolchain import SourceFile, Toolchain

logger = logging.getLogger(__name__)


CPP_TOOLCHAIN = Toolchain(
    name="c++",
    compile_template=("g++", "{source}", "-o", "{basename}", "-DLOCAL", "-std=c++17"),
    run_template=("./{basename}",),
)

JAVA_TOOLCHAIN = Toolchain(
    name="java",
    compile_template=("javac", "{source}"),
    run_template=("java", "-enableassertions", "-Xmx256m", "{basename}"),
)

GO_TOOLCHAIN = Toolchain(
    name="go",
    compile_template=("go", "build", "-o", "{basename}", "{source}"),
    run_template=("./{basename}",),
)

RUBY_TOOLCHAIN = Toolchain(
    name="ruby",
    compile_template=("true",),
    run_template=("ruby", "{source}"),
)

DEFAULT_TOOLCHAIN = CPP_TOOLCHAIN

# extension -> toolchain
TOOLCHAINS: Dict[str, Toolchain] = {
    ".java": JAVA_TOOLCHAIN,
    ".go": GO_TOOLCHAIN,
    ".rb": RUBY_TOOLCHAIN,
    ".c": CPP_TOOLCHAIN,
    ".cc": CPP_TOOLCHAIN,
    ".cpp": CPP_TOOLCHAIN,
}

# Compiled artifacts that never count as input files
ARTIFACT_EXTENSIONS = (".class",)


def build_toolchain_table(overrides: Optional[Mapping[str, Toolchain]] = None) -> Dict[str, Toolchain]:
    """Built-in table merged with entries from a configuration file"""
    table = dict(TOOLCHAINS)
    if overrides:
        table.update({ext.lower(): toolchain for ext, toolchain in overrides.items()})
    return table


def select_toolchain(
    source: SourceFile,
    table: Optional[Mapping[str, Toolchain]] = None
) -> Toolchain:
    """
    Select the toolchain for a source file

    Unknown extensions fall back to the C++ toolchain without error.

    Args:
        source: Source file being tested
        table: Extension -> toolchain mapping (default: built-in table)

    Returns:
        Toolchain for the source file
    """
    if table is None:
        table = TOOLCHAINS

    toolchain = table.get(source.extension)
    if toolchain is None:
        logger.debug(
            f"No toolchain registered for '{source.extension}', using {DEFAULT_TOOLCHAIN.name}"
        )
        return DEFAULT_TOOLCHAIN

    logger.debug(f"Using {toolchain.name} toolchain for {source.name}")
    return toolchain
