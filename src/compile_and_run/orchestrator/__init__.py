"""
Orchestrator Layer
"""
from .test_orchestrator import TestOrchestrator

__all__ = ['TestOrchestrator']
