"""
Travel Booking Agent - LLM tool-calling demo

This package provides:
- Mock travel tools (flight schedule, hotel booking, currency conversion)
- A tool registry and dispatcher with typed argument validation
- A two-pass orchestrator: a selection model picks tools, a synthesis
  model writes the final answer
- A command-line entry point
"""

from .llm_call import LLMClient
from .orchestration import BookingOrchestrator, OrchestrationResult, run_query

__all__ = [
    "BookingOrchestrator",
    "OrchestrationResult",
    "LLMClient",
    "run_query",
]

__version__ = "0.1.0"
