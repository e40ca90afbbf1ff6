"""Tools and API helpers shared by the test suite.

Kept in an importable module so tools can also be registered by dotted
path ("support.Weather").
"""

import asyncio
import json
import time

import httpx

from anthropic_community.tools import Tool, ToolParameter


def make_reply(text: str, message_id: str = "msg_01", **overrides) -> dict:
    """Build a Messages API reply body with a single text block."""
    body = {
        "id": message_id,
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
        "model": "claude-3-opus-20240229",
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 12, "output_tokens": 6},
    }
    body.update(overrides)
    return body


def invoke_block(tool_name: str, **parameters: str) -> str:
    """Render an `<invoke>` block the way the model writes one."""
    rendered = "".join(f"<{k}>{v}</{k}>\n" for k, v in parameters.items())
    return (
        "<invoke>\n"
        f"<tool_name>{tool_name}</tool_name>\n"
        f"<parameters>\n{rendered}</parameters>\n"
        "</invoke>\n"
    )


class ScriptedApi:
    """Plays back queued responses and records the requests it receives."""

    def __init__(self):
        self.responses: list[httpx.Response | Exception] = []
        self.requests: list[httpx.Request] = []

    def reply(self, body: dict, status: int = 200) -> "ScriptedApi":
        self.responses.append(httpx.Response(status, json=body))
        return self

    def raw(self, status: int, content: bytes | str) -> "ScriptedApi":
        self.responses.append(httpx.Response(status, content=content))
        return self

    def fail(self, error: Exception) -> "ScriptedApi":
        self.responses.append(error)
        return self

    def payload(self, index: int) -> dict:
        return json.loads(self.requests[index].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class Weather(Tool):
    """Synchronous tool recording the arguments it was called with."""

    description = "Returns the current weather for a location."
    parameters = [
        ToolParameter("location", "string", "City to get the weather for."),
    ]

    def __init__(self):
        self.calls: list[dict] = []

    def invoke(self, arguments):
        self.calls.append(arguments)
        return f"Sunny, 21C in {arguments['location']}"


class Adder(Tool):
    """Typed parameters: integer and float."""

    name = "add_numbers"
    description = "Adds two numbers."
    parameters = [
        ToolParameter("a", "integer", "First addend."),
        ToolParameter("b", "float", "Second addend."),
    ]

    def invoke(self, arguments):
        return str(arguments["a"] + arguments["b"])


class SlowEcho(Tool):
    """Async tool that sleeps before echoing, to control completion order."""

    description = "Echoes a value after a delay."
    parameters = [
        ToolParameter("value", "string", "Value to echo."),
        ToolParameter("delay", "float", "Seconds to wait."),
    ]

    def __init__(self):
        self.completed: list[str] = []
        self.cancelled: list[str] = []
        self.running = 0
        self.max_running = 0

    async def invoke(self, arguments):
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            await asyncio.sleep(arguments["delay"])
        except asyncio.CancelledError:
            self.cancelled.append(arguments["value"])
            raise
        finally:
            self.running -= 1
        self.completed.append(arguments["value"])
        return arguments["value"]


class SlowSync(Tool):
    """Synchronous tool that blocks its worker thread before echoing."""

    description = "Echoes a value after blocking for a delay."
    parameters = [
        ToolParameter("value", "string", "Value to echo."),
        ToolParameter("delay", "float", "Seconds to block."),
    ]

    def __init__(self):
        self.completed: list[str] = []

    def invoke(self, arguments):
        time.sleep(arguments["delay"])
        self.completed.append(arguments["value"])
        return arguments["value"]


class Broken(Tool):
    """Async tool that fails after a short delay."""

    description = "Always fails."
    parameters = []

    async def invoke(self, arguments):
        await asyncio.sleep(0.01)
        raise RuntimeError("boom")


class NotATool:
    """Plain class that does not derive from Tool."""
