"""Rendering of tool descriptions into the system prompt."""

from typing import Iterable

from anthropic_community.tools.base import Tool, ToolParameter

TOOLS_PREAMBLE = """In this environment you have access to a set of tools you can use to answer the user's question.

You may call them like this:
<function_calls>
<invoke>
<tool_name>$TOOL_NAME</tool_name>
<parameters>
<$PARAMETER_NAME>$PARAMETER_VALUE</$PARAMETER_NAME>
...
</parameters>
</invoke>
</function_calls>

Here are the tools available:
<tools>
"""

TOOLS_CLOSING = "</tools>"


def _describe_parameter(parameter: ToolParameter) -> str:
    return (
        "<parameter>\n"
        f"<name>{parameter.name}</name>\n"
        f"<type>{parameter.type}</type>\n"
        f"<description>{parameter.description}</description>\n"
        "</parameter>\n"
    )


def describe_tool(tool: Tool) -> str:
    """Render a `<tool_description>` block for a tool.

    Args:
        tool: The tool to describe

    Returns:
        str: The tool description with name, description and parameters
    """
    parameters = "".join(_describe_parameter(p) for p in tool.parameters)
    return (
        "<tool_description>\n"
        f"<tool_name>{tool.name}</tool_name>\n"
        "<description>\n"
        f"{tool.description}\n"
        "</description>\n"
        "<parameters>\n"
        f"{parameters}"
        "</parameters>\n"
        "</tool_description>\n"
    )


def decorate_system_prompt(system: str | None, tools: Iterable[Tool]) -> str | None:
    """Append the tool-use preamble and all tool descriptions to a system prompt.

    Returns the system prompt unchanged when there are no tools.
    """
    tools = list(tools)
    if not tools:
        return system

    descriptions = "".join(describe_tool(tool) for tool in tools)
    prefix = f"{system}\n\n" if system else ""
    return f"{prefix}{TOOLS_PREAMBLE}{descriptions}{TOOLS_CLOSING}"
