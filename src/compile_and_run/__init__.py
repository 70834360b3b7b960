"""
compile-and-run - compile a solution and check it against local input/output files
"""
__version__ = "1.0.0"
