"""Tool definition, invocation scanning, execution and result formatting.

This package implements the text-embedded function calling convention:
tools are described to the model in the system prompt, the model requests
them with `<invoke>` blocks, and results are sent back in a
`<function_results>` block.
"""

from anthropic_community.tools.base import Tool, ToolParameter, load_tool
from anthropic_community.tools.description import decorate_system_prompt, describe_tool
from anthropic_community.tools.executor import execute_invocations, resolve_invocation
from anthropic_community.tools.formatter import format_results
from anthropic_community.tools.scanner import Invocation, scan_invocations

__all__ = [
    "Invocation",
    "Tool",
    "ToolParameter",
    "decorate_system_prompt",
    "describe_tool",
    "execute_invocations",
    "format_results",
    "load_tool",
    "resolve_invocation",
    "scan_invocations",
]
