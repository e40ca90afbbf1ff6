"""Concurrent execution of the invocations requested in one turn.

All invocations of a turn are resolved first, then run as asyncio tasks
bounded by a semaphore. Results come back in invocation order regardless
of completion order.

A failing tool aborts the turn and its siblings are cancelled. A sync
sibling already running in a worker thread can not be interrupted, so it
is waited for before the error is raised. Sibling results are discarded.
"""

import asyncio
import inspect
import logging
from typing import Any, Mapping, Sequence

from anthropic_community.errors import InvocationError, ToolExecutionError
from anthropic_community.tools.base import Tool
from anthropic_community.tools.scanner import Invocation

logger = logging.getLogger(__name__)


def resolve_invocation(
    invocation: Invocation, tools: Mapping[str, Tool]
) -> tuple[Tool, dict[str, Any]]:
    """Resolve an invocation to its tool and typed arguments.

    Declared parameters are converted to their declared type, undeclared
    ones are passed through as raw strings.

    Raises:
        InvocationError: If the tool is not registered or an argument
                         cannot be converted
    """
    tool = tools.get(invocation.tool_name) if invocation.tool_name else None
    if tool is None:
        raise InvocationError(invocation.tool_name)

    arguments: dict[str, Any] = {}
    for name, raw_value in invocation.parameters:
        parameter = tool.get_parameter(name)
        if parameter is None:
            arguments[name] = raw_value
            continue
        try:
            arguments[name] = parameter.convert(raw_value)
        except ValueError as e:
            raise InvocationError(
                tool.name,
                f"Invocation error: Invalid value {raw_value!r} for parameter "
                f"{name} ({parameter.type}) of tool {tool.name}",
            ) from e
    return tool, arguments


async def _run_tool(
    tool: Tool,
    arguments: dict[str, Any],
    semaphore: asyncio.Semaphore,
    failed: asyncio.Event,
) -> str | None:
    async with semaphore:
        if failed.is_set():
            logger.debug(f"Skipping tool {tool.name}, a sibling already failed")
            return None
        logger.debug(f"Invoking tool {tool.name} with {arguments}")
        try:
            if inspect.iscoroutinefunction(tool.invoke):
                result = await tool.invoke(arguments)
            else:
                result = await _run_in_thread(tool, arguments)
        except Exception:
            failed.set()
            raise
        logger.debug(f"Tool {tool.name} finished")
        return str(result)


async def _run_in_thread(tool: Tool, arguments: dict[str, Any]) -> Any:
    thread_call = asyncio.ensure_future(asyncio.to_thread(tool.invoke, arguments))
    try:
        return await asyncio.shield(thread_call)
    except asyncio.CancelledError:
        # worker threads can not be interrupted, hold the slot until the call returns
        outcome = (await asyncio.gather(thread_call, return_exceptions=True))[0]
        if isinstance(outcome, BaseException):
            logger.warning(f"Cancelled tool {tool.name} failed while finishing: {outcome}")
        else:
            logger.debug(f"Cancelled tool {tool.name} finished, result discarded")
        raise


async def execute_invocations(
    invocations: Sequence[Invocation],
    tools: Mapping[str, Tool],
    max_concurrency: int = 8,
) -> list[str]:
    """Execute invocations concurrently and collect their results.

    Args:
        invocations: Invocations in the order the model requested them
        tools: Registered tools by name
        max_concurrency: Maximum number of tools running at once. Further
                         invocations wait for a free slot.

    Returns:
        list[str]: Result strings aligned with `invocations`

    Raises:
        InvocationError: If any invocation cannot be resolved. Nothing runs.
        ToolExecutionError: If a tool raises. Siblings are cancelled, or
                            waited for when they already run in a thread,
                            before this is raised. With several failures
                            the first in invocation order is raised and
                            the others are logged.
    """
    resolved = [resolve_invocation(invocation, tools) for invocation in invocations]
    if not resolved:
        return []

    semaphore = asyncio.Semaphore(max_concurrency)
    failed = asyncio.Event()
    tasks = [
        asyncio.create_task(
            _run_tool(tool, arguments, semaphore, failed), name=tool.name
        )
        for tool, arguments in resolved
    ]
    logger.info(f"Executing {len(tasks)} tool invocation(s)")

    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    failures = [
        (tool, task.exception())
        for (tool, _), task in zip(resolved, tasks)
        if not task.cancelled() and task.exception() is not None
    ]
    for tool, exc in failures[1:]:
        logger.error(f"Tool {tool.name} also failed: {exc}")
    if failures:
        tool, exc = failures[0]
        logger.error(f"Tool {tool.name} failed: {exc}")
        raise ToolExecutionError(tool.name, exc) from exc

    return [task.result() for task in tasks]
