"""
Validator Layer - compare program output against reference files
"""
from .output_validator import OutputValidator

__all__ = ['OutputValidator']
