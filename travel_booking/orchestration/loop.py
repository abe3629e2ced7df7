"""
Two-pass booking orchestration.

A selection model sees the tool catalog and decides which tools to call.
The requested tools run locally, their results are appended to the
conversation, and a synthesis model (no tool access) writes the final
answer. When the selection model calls no tools its reply is the answer
and the second pass is skipped.

State machine::

    AWAITING_SELECTION -> EXECUTING_TOOLS -> AWAITING_SYNTHESIS -> DONE
    AWAITING_SELECTION -> DONE                 (no tool calls)

Errors are logged and re-raised; a failure at any point ends the run.
"""

import logging
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from openai.types.chat import ChatCompletion, ChatCompletionMessage

from ..errors import ConversationError
from ..llm_call import LLMClient
from ..tools.dispatcher import execute_tool, parse_arguments
from ..tracing import TracingContext
from .conversation import Conversation, ToolInvocation
from .tool_defs import build_tool_definitions

logger = logging.getLogger(__name__)

DEFAULT_QUERY = (
    "I'm taking a flight from Lagos to Nairobi for a conference. I would like "
    "to know the total flight time back and forth, and the total cost of "
    "logistics for this conference if I'm staying for three days."
)


class OrchestrationState(str, Enum):
    """Where a run currently is."""

    AWAITING_SELECTION = "awaiting_selection"
    EXECUTING_TOOLS = "executing_tools"
    AWAITING_SYNTHESIS = "awaiting_synthesis"
    DONE = "done"


@dataclass
class ToolCallRecord:
    """One executed tool call."""

    id: str
    name: str
    arguments: dict[str, Any]
    result: dict[str, Any]


@dataclass
class OrchestrationResult:
    """Result from a complete orchestration run."""

    answer: Optional[str]
    finish_reason: Optional[str]
    selection_model: str
    synthesis_model: Optional[str] = None  # None when the second pass was skipped
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
    messages: list[dict] = field(default_factory=list)
    state: OrchestrationState = OrchestrationState.DONE

    @property
    def synthesized(self) -> bool:
        return self.synthesis_model is not None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["state"] = self.state.value
        return data


class BookingOrchestrator:
    """
    Runs one travel query through the selection and synthesis models.

    Per-run flow:
        1. Start a conversation with the user's query
        2. Call the selection model with the tool catalog, tool_choice="auto"
        3. Append the reply; stop here if it requests no tools
        4. Execute each requested tool in order, appending its result
        5. Call the synthesis model with the full conversation, no tools
    """

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        selection_model: Optional[str] = None,
        synthesis_model: Optional[str] = None,
        run_id: Optional[str] = None,
        tracing_context: Optional[TracingContext] = None,
    ):
        self._owns_client = llm_client is None
        self.llm_client = llm_client or LLMClient()
        self.selection_model = selection_model or self.llm_client.config.selection_model
        self.synthesis_model = synthesis_model or self.llm_client.config.synthesis_model
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self.tracing_context = tracing_context or TracingContext(run_id=self.run_id)
        self.state = OrchestrationState.AWAITING_SELECTION

    def run(self, query: str = DEFAULT_QUERY) -> OrchestrationResult:
        """
        Run the orchestration for a query.

        Args:
            query: The user's travel question.

        Returns:
            OrchestrationResult with the answer and the executed tool calls.
        """
        self.state = OrchestrationState.AWAITING_SELECTION
        logger.debug(f"[{self.run_id}] Starting orchestration for: {query}")

        with self.tracing_context.span(
            name="booking_run",
            input={"query": query},
            metadata={
                "selection_model": self.selection_model,
                "synthesis_model": self.synthesis_model,
            },
        ) as run_span:
            result = self._run(query)
            run_span.set_output(
                {
                    "answer": (result.answer or "")[:500],
                    "tools_used": [c.name for c in result.tool_calls],
                }
            )

        self._log_summary(result)
        return result

    def _run(self, query: str) -> OrchestrationResult:
        conversation = Conversation()
        conversation.add_user(query)

        response = self._call_model(
            "selection",
            self.selection_model,
            conversation,
            tools=build_tool_definitions(),
        )
        choice = response.choices[0]
        message = choice.message
        logger.info(f"[{self.run_id}] Finish reason: {choice.finish_reason}")

        invocations = self._extract_invocations(message)
        conversation.add_assistant(message.content, invocations)

        if not message.tool_calls:
            self.state = OrchestrationState.DONE
            return OrchestrationResult(
                answer=message.content,
                finish_reason=choice.finish_reason,
                selection_model=self.selection_model,
                messages=conversation.to_openai(),
                state=self.state,
            )

        self.state = OrchestrationState.EXECUTING_TOOLS
        records = [self._run_tool(call, conversation) for call in invocations]

        pending = conversation.pending_tool_call_ids
        if pending:
            raise ConversationError(
                f"Tool calls without results: {', '.join(sorted(pending))}"
            )

        self.state = OrchestrationState.AWAITING_SYNTHESIS
        final = self._call_model("synthesis", self.synthesis_model, conversation)
        self.state = OrchestrationState.DONE

        return OrchestrationResult(
            answer=final.choices[0].message.content,
            finish_reason=choice.finish_reason,
            selection_model=self.selection_model,
            synthesis_model=self.synthesis_model,
            tool_calls=records,
            messages=conversation.to_openai(),
            state=self.state,
        )

    def _call_model(
        self,
        phase: str,
        model: str,
        conversation: Conversation,
        tools: Optional[list[dict]] = None,
    ) -> ChatCompletion:
        """Issue one chat-completions request, traced as a generation."""
        messages = conversation.to_openai()
        with self.tracing_context.generation(
            name=f"{phase}_call",
            model=model,
            input=messages,
            model_parameters={"tool_choice": "auto"} if tools else None,
        ) as gen:
            try:
                response = self.llm_client.create_completion(
                    model=model,
                    messages=messages,
                    tools=tools,
                    tool_choice="auto" if tools else None,
                )
            except Exception as e:
                logger.error(f"[{self.run_id}] {phase} call to {model} failed: {e}")
                raise

            gen.set_output(response.choices[0].message.content)
            if response.usage:
                gen.set_usage(
                    prompt_tokens=response.usage.prompt_tokens,
                    completion_tokens=response.usage.completion_tokens,
                    total_tokens=response.usage.total_tokens,
                )
            return response

    def _extract_invocations(
        self, message: ChatCompletionMessage
    ) -> tuple[ToolInvocation, ...]:
        """Collect the function tool calls from a model reply, in order."""
        invocations = []
        for call in message.tool_calls or []:
            function = getattr(call, "function", None)
            if call.type != "function" or function is None:
                logger.debug(f"[{self.run_id}] Skipping non-function tool call {call.id}")
                continue
            invocations.append(
                ToolInvocation(id=call.id, name=function.name, arguments=function.arguments)
            )
        return tuple(invocations)

    def _run_tool(
        self, call: ToolInvocation, conversation: Conversation
    ) -> ToolCallRecord:
        """Parse, dispatch and record a single tool call."""
        with self.tracing_context.span(
            name=f"tool:{call.name}",
            input={"arguments": call.arguments},
        ) as span:
            arguments = parse_arguments(call.name, call.arguments)
            logger.info(f"[{self.run_id}] Calling: {call.name} {arguments}")
            try:
                result = execute_tool(call.name, arguments)
            except Exception as e:
                logger.error(f"[{self.run_id}] Tool '{call.name}' failed: {e}")
                raise
            span.set_output(result)

        conversation.add_tool_result(call.id, result)
        logger.info(f"[{self.run_id}] Result: {result}")
        return ToolCallRecord(id=call.id, name=call.name, arguments=arguments, result=result)

    def _log_summary(self, result: OrchestrationResult) -> None:
        """Log a compact run summary."""
        logger.info(f"[{self.run_id}] {'─' * 50}")
        synthesis = result.synthesis_model if result.synthesized else "skipped"
        logger.info(
            f"[{self.run_id}] RUN SUMMARY: {len(result.tool_calls)} tool call(s), "
            f"synthesis {synthesis}"
        )
        for record in result.tool_calls:
            logger.info(f"[{self.run_id}]   {record.name} -> {record.result}")

    def close(self) -> None:
        """Close the LLM client if this orchestrator created it."""
        if self._owns_client:
            self.llm_client.close()


def run_query(query: str = DEFAULT_QUERY, llm_client: Optional[LLMClient] = None) -> str:
    """
    Convenience function to run a single query.

    Args:
        query: The travel question
        llm_client: Optional pre-built client

    Returns:
        The final answer text
    """
    orchestrator = BookingOrchestrator(llm_client=llm_client)
    try:
        return orchestrator.run(query).answer or ""
    finally:
        orchestrator.close()
