"""
Run-scoped tracing context using Langfuse SDK v3.

Spans and generations are opened with ``start_as_current_observation``,
so nesting ``with`` blocks produces the parent/child structure through
OpenTelemetry context propagation. Every context manager degrades to a
no-op when tracing is disabled, and exceptions raised inside a block are
recorded on the observation and re-raised.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

from .client import get_tracing_client

logger = logging.getLogger(__name__)


@dataclass
class SpanContext:
    """Handle for an open span; collects output and status until it ends."""

    name: str
    enabled: bool = False
    input: Optional[Any] = None
    metadata: Optional[dict] = None
    _context_manager: Any = field(default=None, repr=False)
    _observation: Any = field(default=None, repr=False)
    _start_time: float = field(default=0.0, repr=False)
    _output: Optional[Any] = field(default=None, repr=False)
    _status: str = field(default="success", repr=False)

    def _observation_kwargs(self) -> dict:
        return {
            "as_type": "span",
            "name": self.name,
            "input": self.input,
            "metadata": self.metadata,
        }

    def _end_kwargs(self) -> dict:
        kwargs: dict[str, Any] = {
            "metadata": {
                "status": self._status,
                "duration_ms": round((time.time() - self._start_time) * 1000, 2),
            }
        }
        if self._output is not None:
            kwargs["output"] = self._output
        if self._status == "error":
            kwargs["level"] = "ERROR"
        return kwargs

    def start(self) -> None:
        if not self.enabled:
            return
        client = get_tracing_client()
        if not client or not client.client:
            return
        try:
            self._start_time = time.time()
            self._context_manager = client.client.start_as_current_observation(
                **self._observation_kwargs()
            )
            self._observation = self._context_manager.__enter__()
        except Exception as e:
            logger.warning(f"Failed to start observation '{self.name}': {e}")
            self._observation = None

    def end(self) -> None:
        if not self.enabled or not self._observation:
            return
        try:
            self._observation.update(**self._end_kwargs())
            self._context_manager.__exit__(None, None, None)
        except Exception as e:
            logger.warning(f"Failed to end observation '{self.name}': {e}")

    def set_output(self, output: Any) -> None:
        self._output = output

    def set_status(self, status: str) -> None:
        self._status = status


@dataclass
class GenerationContext(SpanContext):
    """Handle for an LLM generation, with model and token usage."""

    model: str = ""
    model_parameters: Optional[dict] = None
    _usage: Optional[dict] = field(default=None, repr=False)

    def _observation_kwargs(self) -> dict:
        kwargs = super()._observation_kwargs()
        kwargs.update(
            as_type="generation",
            model=self.model,
            model_parameters=self.model_parameters,
        )
        return kwargs

    def _end_kwargs(self) -> dict:
        kwargs = super()._end_kwargs()
        if self._usage:
            kwargs["usage_details"] = self._usage
        return kwargs

    def set_usage(
        self,
        prompt_tokens: Optional[int] = None,
        completion_tokens: Optional[int] = None,
        total_tokens: Optional[int] = None,
    ) -> None:
        """Set token usage for the generation."""
        usage = {
            "input": prompt_tokens,
            "output": completion_tokens,
            "total": total_tokens,
        }
        self._usage = {k: v for k, v in usage.items() if v is not None}


@dataclass
class TracingContext:
    """Tracing for a single orchestration run."""

    run_id: str
    _enabled: bool = field(default=False, repr=False)

    def __post_init__(self):
        client = get_tracing_client()
        self._enabled = client is not None and client.enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    @contextmanager
    def _observe(self, ctx: SpanContext) -> Generator[SpanContext, None, None]:
        ctx.start()
        try:
            yield ctx
        except Exception:
            ctx.set_status("error")
            raise
        finally:
            ctx.end()

    @contextmanager
    def span(
        self,
        name: str,
        input: Optional[Any] = None,
        metadata: Optional[dict] = None,
    ) -> Generator[SpanContext, None, None]:
        """Open a span; nested spans become its children."""
        meta = {"run_id": self.run_id, **(metadata or {})}
        with self._observe(
            SpanContext(name=name, enabled=self._enabled, input=input, metadata=meta)
        ) as ctx:
            yield ctx

    @contextmanager
    def generation(
        self,
        name: str,
        model: str,
        input: Optional[Any] = None,
        model_parameters: Optional[dict] = None,
    ) -> Generator[GenerationContext, None, None]:
        """Open a generation observation for one LLM call."""
        gen = GenerationContext(
            name=name,
            enabled=self._enabled,
            input=input,
            metadata={"run_id": self.run_id},
            model=model,
            model_parameters=model_parameters,
        )
        with self._observe(gen) as ctx:
            yield ctx  # type: ignore[misc]
