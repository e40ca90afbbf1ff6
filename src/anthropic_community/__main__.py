"""CLI entry point for anthropic-community.

This module provides a command-line interface that sends one prompt to the
Messages API, runs any requested tools, and prints the final reply. It can
be invoked as `anthropic-community` (via the script entry point) or
`python -m anthropic_community`.
"""

import argparse
import asyncio
import logging
import sys

from anthropic_community import __version__
from anthropic_community.client import AnthropicClient
from anthropic_community.config import AnthropicSettings
from anthropic_community.conversation import new_conversation
from anthropic_community.errors import AnthropicError
from anthropic_community.services import TurnDriver

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="anthropic-community",
        description="Send a prompt to the Anthropic Messages API with tool calling",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"anthropic-community {__version__}",
    )

    parser.add_argument("prompt", type=str, help="User message to send")

    parser.add_argument(
        "--system",
        type=str,
        default=None,
        help="System prompt for the conversation",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model to use (default: claude-3-opus-20240229, can be set via ANTHROPIC_MODEL)",
    )

    parser.add_argument(
        "--max-tokens",
        type=int,
        default=None,
        help="Maximum tokens per reply (default: 1000, can be set via ANTHROPIC_MAX_TOKENS)",
    )

    parser.add_argument(
        "--image",
        action="append",
        default=[],
        metavar="PATH",
        help="Image file to attach before the prompt (repeatable)",
    )

    parser.add_argument(
        "--tool",
        action="append",
        default=[],
        metavar="DOTTED.PATH",
        help="Tool class to register, e.g. my_app.tools.Weather (repeatable)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via ANTHROPIC_LOG_LEVEL)",
    )

    return parser


async def run(args: argparse.Namespace, settings: AnthropicSettings) -> int:
    """Run one conversation turn loop and print the reply.

    Returns:
        int: Process exit code
    """
    overrides = {}
    if args.model is not None:
        overrides["model"] = args.model
    if args.max_tokens is not None:
        overrides["max_tokens"] = args.max_tokens

    conversation = new_conversation(settings, **overrides)
    if args.system:
        conversation = conversation.add_system_message(args.system)
    for tool in args.tool:
        conversation = conversation.register_tool(tool)
    for path in args.image:
        conversation = conversation.add_image(path, "path")
    conversation = conversation.add_user_message(args.prompt)

    async with AnthropicClient(settings) as client:
        result = await TurnDriver(client).run(conversation)

    if result.error is not None:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print(result.response.text if result.response else "")
    return 0


def main() -> int:
    """Main entry point for the anthropic-community CLI."""
    args = build_parser().parse_args()

    # CLI args override environment variables
    settings_kwargs = {}
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level
    settings = AnthropicSettings(**settings_kwargs)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(run(args, settings))
    except AnthropicError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
