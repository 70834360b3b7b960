"""Core models"""
from .toolchain import SourceFile, Toolchain, describe_command
from .run_result import ProcessResult, RunResult, Verdict

__all__ = [
    'SourceFile',
    'Toolchain',
    'describe_command',
    'ProcessResult',
    'RunResult',
    'Verdict',
]
