"""
Test Runner Layer - compile the solution and run it against input files
"""
from .batch_runner import BatchRunner, discover_input_files, matching_output_file
from .compiler import CompilationError, Compiler

__all__ = [
    'BatchRunner',
    'CompilationError',
    'Compiler',
    'discover_input_files',
    'matching_output_file',
]
