"""
Tests for Langfuse tracing integration.

Tests cover:
- Client disabled states (credentials, auth failure)
- Context manager no-ops when disabled
- Observation lifecycle with a mocked Langfuse client
- Observations emitted by a full orchestration run
"""

from unittest.mock import MagicMock, patch

import pytest

from travel_booking.errors import ToolArgumentError
from travel_booking.orchestration import BookingOrchestrator
from travel_booking.tracing import (
    TracingClient,
    TracingContext,
    get_tracing_client,
    init_tracing_client,
    shutdown_tracing,
)


class TestTracingClient:
    """Tests for TracingClient."""

    def test_client_disabled_without_credentials(self):
        client = TracingClient(public_key="", secret_key="")
        assert client.enabled is False
        assert "credentials not configured" in client.error.lower()

    def test_client_disabled_with_partial_credentials(self):
        client = TracingClient(public_key="pk-test", secret_key="")
        assert client.enabled is False
        assert client.client is None

    def test_flush_and_shutdown_no_op_when_disabled(self):
        client = TracingClient()
        client.flush()
        client.shutdown()

    @patch("travel_booking.tracing.client.Langfuse")
    def test_client_enabled_with_valid_auth(self, mock_langfuse_cls):
        mock_langfuse_cls.return_value.auth_check.return_value = True

        client = TracingClient(
            public_key="pk", secret_key="sk", host="http://langfuse:3000"
        )

        assert client.enabled is True
        assert client.error is None
        mock_langfuse_cls.assert_called_once_with(
            public_key="pk", secret_key="sk", debug=False, host="http://langfuse:3000"
        )

    @patch("travel_booking.tracing.client.Langfuse")
    def test_client_disabled_on_failed_auth(self, mock_langfuse_cls):
        mock_langfuse_cls.return_value.auth_check.return_value = False

        client = TracingClient(public_key="pk", secret_key="sk")

        assert client.enabled is False
        assert client.client is None
        assert "auth_check" in client.error

    @patch("travel_booking.tracing.client.Langfuse")
    def test_client_disabled_on_init_error(self, mock_langfuse_cls):
        mock_langfuse_cls.side_effect = RuntimeError("boom")

        client = TracingClient(public_key="pk", secret_key="sk")

        assert client.enabled is False
        assert "boom" in client.error


class TestGlobalClient:
    """Tests for the module-level singleton."""

    def test_init_and_shutdown(self):
        client = init_tracing_client()
        assert get_tracing_client() is client
        shutdown_tracing()
        assert get_tracing_client() is None


class TestTracingContextDisabled:
    """Context managers are no-ops without a client."""

    def test_disabled_without_client(self):
        ctx = TracingContext(run_id="run-1")
        assert ctx.enabled is False

    def test_span_no_op(self):
        ctx = TracingContext(run_id="run-1")
        with ctx.span("work", input={"a": 1}) as span:
            span.set_output({"b": 2})

    def test_generation_no_op(self):
        ctx = TracingContext(run_id="run-1")
        with ctx.generation("call", model="m") as gen:
            gen.set_usage(prompt_tokens=1, completion_tokens=2, total_tokens=3)
            gen.set_output("text")

    def test_exceptions_propagate(self):
        ctx = TracingContext(run_id="run-1")
        with pytest.raises(ValueError):
            with ctx.span("work"):
                raise ValueError("bad")


class TestTracingContextEnabled:
    """Observation lifecycle with a mocked Langfuse client."""

    @pytest.fixture
    def langfuse(self):
        with patch("travel_booking.tracing.client.Langfuse") as mock_cls:
            mock_cls.return_value.auth_check.return_value = True
            init_tracing_client(public_key="pk", secret_key="sk")
            yield mock_cls.return_value

    def test_span_records_output(self, langfuse):
        observation = MagicMock()
        langfuse.start_as_current_observation.return_value.__enter__.return_value = (
            observation
        )

        ctx = TracingContext(run_id="run-1")
        with ctx.span("booking_run", input={"query": "q"}) as span:
            span.set_output({"answer": "a"})

        kwargs = langfuse.start_as_current_observation.call_args.kwargs
        assert kwargs["as_type"] == "span"
        assert kwargs["name"] == "booking_run"
        assert kwargs["metadata"]["run_id"] == "run-1"
        update = observation.update.call_args.kwargs
        assert update["output"] == {"answer": "a"}
        assert update["metadata"]["status"] == "success"

    def test_generation_records_usage(self, langfuse):
        observation = MagicMock()
        langfuse.start_as_current_observation.return_value.__enter__.return_value = (
            observation
        )

        ctx = TracingContext(run_id="run-1")
        with ctx.generation("selection_call", model="m") as gen:
            gen.set_usage(prompt_tokens=10, completion_tokens=5, total_tokens=15)

        kwargs = langfuse.start_as_current_observation.call_args.kwargs
        assert kwargs["as_type"] == "generation"
        assert kwargs["model"] == "m"
        update = observation.update.call_args.kwargs
        assert update["usage_details"] == {"input": 10, "output": 5, "total": 15}

    def test_error_status_on_exception(self, langfuse):
        observation = MagicMock()
        langfuse.start_as_current_observation.return_value.__enter__.return_value = (
            observation
        )

        ctx = TracingContext(run_id="run-1")
        with pytest.raises(RuntimeError):
            with ctx.span("tool:get_hotel_booking"):
                raise RuntimeError("tool failed")

        update = observation.update.call_args.kwargs
        assert update["metadata"]["status"] == "error"
        assert update["level"] == "ERROR"


class TestOrchestratorTracing:
    """Observations opened by BookingOrchestrator.run with tracing enabled."""

    USAGE = {"prompt_tokens": 12, "completion_tokens": 4, "total_tokens": 16}

    @pytest.fixture
    def observations(self):
        """Enable tracing and record every observation in start order."""
        opened = []

        def _start(**kwargs):
            observation = MagicMock()
            opened.append((kwargs, observation))
            context_manager = MagicMock()
            context_manager.__enter__.return_value = observation
            return context_manager

        with patch("travel_booking.tracing.client.Langfuse") as mock_cls:
            langfuse = mock_cls.return_value
            langfuse.auth_check.return_value = True
            langfuse.start_as_current_observation.side_effect = _start
            init_tracing_client(public_key="pk", secret_key="sk")
            yield opened

    def _by_name(self, observations, name):
        return next(obs for kwargs, obs in observations if kwargs["name"] == name)

    def test_lagos_nairobi_observations(
        self, observations, mock_llm_client, make_completion
    ):
        mock_llm_client.client.chat.completions.create.side_effect = [
            make_completion(
                tool_calls=[
                    (
                        "call_flight",
                        "get_flight_schedule",
                        {
                            "origin": "Lagos",
                            "destination": "Nairobi",
                            "tripType": "round-trip",
                        },
                    ),
                    ("call_hotel", "get_hotel_booking", {"city": "Nairobi", "nights": 3}),
                ],
                usage=self.USAGE,
            ),
            make_completion(content="Total: 1200 USD."),
        ]

        orchestrator = BookingOrchestrator(llm_client=mock_llm_client, run_id="run-7")
        assert orchestrator.tracing_context.enabled is True
        orchestrator.run()

        assert [kwargs["name"] for kwargs, _ in observations] == [
            "booking_run",
            "selection_call",
            "tool:get_flight_schedule",
            "tool:get_hotel_booking",
            "synthesis_call",
        ]
        assert [kwargs["as_type"] for kwargs, _ in observations] == [
            "span",
            "generation",
            "span",
            "span",
            "generation",
        ]
        assert all(kwargs["metadata"]["run_id"] == "run-7" for kwargs, _ in observations)

        selection = self._by_name(observations, "selection_call").update.call_args.kwargs
        assert selection["usage_details"] == {"input": 12, "output": 4, "total": 16}

        synthesis = self._by_name(observations, "synthesis_call").update.call_args.kwargs
        assert "usage_details" not in synthesis
        assert synthesis["output"] == "Total: 1200 USD."

        hotel = self._by_name(observations, "tool:get_hotel_booking").update.call_args.kwargs
        assert hotel["output"]["totalHotelCostUSD"] == 360
        assert hotel["metadata"]["status"] == "success"

        run = self._by_name(observations, "booking_run").update.call_args.kwargs
        assert run["output"]["tools_used"] == ["get_flight_schedule", "get_hotel_booking"]

    def test_failing_tool_marks_span_as_error(
        self, observations, mock_llm_client, make_completion
    ):
        mock_llm_client.client.chat.completions.create.side_effect = [
            make_completion(
                tool_calls=[("call_hotel", "get_hotel_booking", {"city": "Nairobi"})]
            ),
        ]

        orchestrator = BookingOrchestrator(llm_client=mock_llm_client)
        with pytest.raises(ToolArgumentError):
            orchestrator.run()

        names = [kwargs["name"] for kwargs, _ in observations]
        assert names == ["booking_run", "selection_call", "tool:get_hotel_booking"]

        tool = self._by_name(observations, "tool:get_hotel_booking").update.call_args.kwargs
        assert tool["level"] == "ERROR"
        assert tool["metadata"]["status"] == "error"

        run = self._by_name(observations, "booking_run").update.call_args.kwargs
        assert run["level"] == "ERROR"
