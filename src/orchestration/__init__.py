"""
Orchestration Layer - Application coordination and workflow management.

This layer coordinates all other layers to provide the complete
order fulfillment workflow.
"""

from .config import ApplicationConfig
from .orchestrator import ApplicationOrchestrator, create_orchestrator

__all__ = [
    "ApplicationConfig",
    "ApplicationOrchestrator",
    "create_orchestrator",
]
