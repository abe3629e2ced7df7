#!/usr/bin/env python3
"""
Travel Booking Agent CLI

Runs one travel query through the selection and synthesis models and
prints the finish reason, each tool call and the final answer.
"""

import argparse
import json
import logging
import sys
from typing import Optional

from openai import OpenAIError

from .config_loader import load_config
from .errors import TravelBookingError
from .llm_call import LLMClient
from .orchestration import DEFAULT_QUERY, BookingOrchestrator, OrchestrationResult
from .tracing import init_tracing_client, shutdown_tracing

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    resolved = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def print_report(result: OrchestrationResult) -> None:
    """Print the run the way a person reads it."""
    print("Model Response:")
    print(f"Finish Reason: {result.finish_reason}")

    if not result.synthesized:
        print("Direct Response:")
        print(result.answer or "")
        return

    print("\nTools Called:")
    for call in result.tool_calls:
        print(f"\nCalling: {call.name}")
        print(f"Arguments: {json.dumps(call.arguments)}")
        print(f"Result: {json.dumps(call.result)}")

    print("\nFinal Answer:\n")
    print(result.answer or "")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Travel booking agent: LLM tool selection over mock travel tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Run the built-in Lagos -> Nairobi query
  %(prog)s -q "Flight from Accra to Cairo?"  # Run a custom query
  %(prog)s --json                            # Dump the result as JSON
""",
    )
    parser.add_argument(
        "-q",
        "--query",
        type=str,
        default=DEFAULT_QUERY,
        help="Travel question to ask (default: the built-in conference query)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file (default: CONFIG_PATH env or environment only)",
    )
    parser.add_argument(
        "--selection-model",
        type=str,
        default=None,
        help="Model that chooses the tools",
    )
    parser.add_argument(
        "--synthesis-model",
        type=str,
        default=None,
        help="Model that writes the final answer",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON (for scripting)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        app_config = load_config(args.config)
    except TravelBookingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.verbose, app_config.log_level)
    init_tracing_client(
        public_key=app_config.langfuse.public_key,
        secret_key=app_config.langfuse.secret_key,
        host=app_config.langfuse.host,
        debug=app_config.langfuse.debug,
    )

    orchestrator: Optional[BookingOrchestrator] = None
    try:
        orchestrator = BookingOrchestrator(
            llm_client=LLMClient(app_config.llm),
            selection_model=args.selection_model,
            synthesis_model=args.synthesis_model,
        )
        result = orchestrator.run(args.query)
    except (TravelBookingError, OpenAIError) as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if orchestrator is not None:
            orchestrator.llm_client.close()
        shutdown_tracing()

    if args.json:
        print(json.dumps({"query": args.query, **result.to_dict()}, indent=2))
    else:
        print_report(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
