"""Rendering of tool results into the `<function_results>` text convention."""

from typing import Iterable


def format_results(results: Iterable[tuple[str, str]]) -> str:
    """Render (tool name, result) pairs as one `<function_results>` block.

    Args:
        results: Pairs in invocation order

    Returns:
        str: The text to send back to the model as a user message
    """
    rendered = "".join(
        "<result>\n"
        f"<tool_name>{tool_name}</tool_name>\n"
        "<stdout>\n"
        f"{result}\n"
        "</stdout>\n"
        "</result>\n"
        for tool_name, result in results
    )
    return f"<function_results>\n{rendered}</function_results>"
