"""Extraction of tool invocations from model reply text.

The model requests tools by embedding pseudo-XML in its text reply:

    <function_calls>
    <invoke>
    <tool_name>Weather</tool_name>
    <parameters>
    <location>Paris</location>
    </parameters>
    </invoke>
    </function_calls>

The text is not guaranteed to be well-formed XML, so it is scanned with
regular expressions and anything that does not match is ignored.
"""

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_INVOKE_RE = re.compile(r"<invoke>(.*?)</invoke>", re.DOTALL)
_TOOL_NAME_RE = re.compile(r"<tool_name>(.*?)</tool_name>", re.DOTALL)
_PARAMETERS_RE = re.compile(r"<parameters>(.*?)</parameters>", re.DOTALL)
_PARAMETER_RE = re.compile(r"<(\w+)>(.*?)</\1>", re.DOTALL)
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][\w.\-]*$")


@dataclass(frozen=True)
class Invocation:
    """A tool-call request found in model text.

    Attributes:
        tool_name: The requested tool name, or None if the token was not
                   a usable name. Resolution against registered tools
                   happens at execution time.
        parameters: (name, raw value) pairs in document order
    """

    tool_name: str | None
    parameters: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def arguments(self) -> dict[str, str]:
        """Parameters as a dict (later duplicates win)."""
        return dict(self.parameters)


def _parse_tool_name(block: str) -> str | None:
    match = _TOOL_NAME_RE.search(block)
    if match is None:
        return None
    name = match.group(1).strip()
    if not _IDENTIFIER_RE.match(name):
        return None
    return name


def _parse_parameters(block: str) -> tuple[tuple[str, str], ...]:
    match = _PARAMETERS_RE.search(block)
    if match is None:
        return ()
    return tuple(
        (name, value.strip()) for name, value in _PARAMETER_RE.findall(match.group(1))
    )


def scan_invocations(text: str) -> list[Invocation]:
    """Find every `<invoke>` block in a text.

    Args:
        text: Raw reply text from the model

    Returns:
        list[Invocation]: One invocation per block, in text order. Empty
        when the text contains no invoke blocks.
    """
    invocations = [
        Invocation(
            tool_name=_parse_tool_name(block),
            parameters=_parse_parameters(block),
        )
        for block in _INVOKE_RE.findall(text)
    ]
    if invocations:
        logger.debug(
            f"Found {len(invocations)} invocation(s): "
            f"{[invocation.tool_name for invocation in invocations]}"
        )
    return invocations
