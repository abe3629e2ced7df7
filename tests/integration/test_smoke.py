"""
Smoke test against a live OpenAI-compatible endpoint.

Skipped unless OPENROUTER_API_KEY is set. Uses the configured selection
and synthesis models, so it costs a few tokens.

Usage:
    OPENROUTER_API_KEY=... pytest tests/integration
"""

import os

import pytest

from travel_booking.orchestration import BookingOrchestrator

pytestmark = pytest.mark.skipif(
    not os.environ.get("OPENROUTER_API_KEY"),
    reason="OPENROUTER_API_KEY not set",
)


def test_default_query_end_to_end():
    """The built-in query produces an answer."""
    orchestrator = BookingOrchestrator()
    try:
        result = orchestrator.run()
    finally:
        orchestrator.close()

    assert result.answer
    for call in result.tool_calls:
        assert call.name in {
            "get_flight_schedule",
            "get_hotel_booking",
            "convert_currency",
        }
