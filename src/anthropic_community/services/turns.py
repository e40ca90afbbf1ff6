"""Turn loop driving a conversation to completion.

This module provides the TurnDriver class which handles:
- Sending a conversation and classifying the outcome
- Appending the reply to the conversation
- Executing requested tool invocations and sending their results back
- Bounding the number of tool round trips
"""

import logging
import time
from dataclasses import dataclass

from anthropic_community.client.client import AnthropicClient
from anthropic_community.config import AnthropicSettings
from anthropic_community.conversation.conversation import Conversation
from anthropic_community.errors import ApiError, ConfigurationError, TurnLimitExceeded
from anthropic_community.services.response import Response, parse_response
from anthropic_community.tools.executor import execute_invocations
from anthropic_community.tools.formatter import format_results
from anthropic_community.tools.scanner import Invocation

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """Outcome of a turn.

    Attributes:
        conversation: The conversation after the turn. Unchanged from the
                      input when the turn failed.
        response: The model's reply, None on error
        error: The API error that ended the turn, None on success
    """

    conversation: Conversation
    response: Response | None = None
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        """Whether the turn succeeded."""
        return self.error is None

    def raise_for_error(self) -> "TurnResult":
        """Raise the carried API error, if any.

        Returns:
            TurnResult: self, for chaining on success
        """
        if self.error is not None:
            raise self.error
        return self


class TurnDriver:
    """Sends conversations and resolves tool invocations until the model is done.

    Attributes:
        client: Transport used to reach the Messages API
        max_turns: Maximum number of tool round trips per `process_invocations`
        max_concurrent_tools: Maximum number of tools running at once
    """

    def __init__(
        self,
        client: AnthropicClient,
        max_turns: int | None = None,
        max_concurrent_tools: int | None = None,
    ):
        """Initialize the TurnDriver.

        Args:
            client: The Messages API client
            max_turns: Tool round trip limit (default: client settings)
            max_concurrent_tools: Tool concurrency ceiling (default: client settings)

        Raises:
            ConfigurationError: If a limit is not greater than 0
        """
        settings: AnthropicSettings = client.settings
        if max_turns is None:
            max_turns = settings.max_turns
        if max_concurrent_tools is None:
            max_concurrent_tools = settings.max_concurrent_tools
        if max_turns <= 0:
            raise ConfigurationError(f"max_turns must be greater than 0, got {max_turns}")
        if max_concurrent_tools <= 0:
            raise ConfigurationError(
                f"max_concurrent_tools must be greater than 0, got {max_concurrent_tools}"
            )

        self.client = client
        self.max_turns = max_turns
        self.max_concurrent_tools = max_concurrent_tools

    async def send_turn(self, conversation: Conversation) -> TurnResult:
        """Send the conversation once and append the reply.

        Args:
            conversation: Conversation with at least one pending user message

        Returns:
            TurnResult: On success, the reply and the conversation with the
            reply appended as an assistant message. On error, the error and
            the unchanged conversation.
        """
        logger.info(
            f"Requesting next message: model={conversation.model}, "
            f"max_tokens={conversation.max_tokens}, messages={len(conversation.messages)}"
        )
        started = time.perf_counter()
        outcome = await self.client.send(conversation.to_payload())

        try:
            response = parse_response(outcome)
        except ApiError as e:
            logger.warning(f"Turn failed with {type(e).__name__}: {e}")
            return TurnResult(conversation=conversation, error=e)

        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"Received message {response.id}: input_tokens={response.usage.input_tokens}, "
            f"output_tokens={response.usage.output_tokens}, "
            f"invocations={len(response.invocations)}, duration_ms={duration_ms}"
        )
        return TurnResult(
            conversation=conversation.add_assistant_message(response.content),
            response=response,
        )

    async def _answer_invocations(
        self, invocations: list[Invocation], conversation: Conversation
    ) -> Conversation:
        results = await execute_invocations(
            invocations, conversation.tools, self.max_concurrent_tools
        )
        names = [invocation.tool_name or "" for invocation in invocations]
        return conversation.add_user_message(format_results(zip(names, results)))

    async def process_invocations(self, result: TurnResult) -> TurnResult:
        """Execute requested tools and resend until the model stops requesting them.

        Args:
            result: The result of a previous turn

        Returns:
            TurnResult: The first result that is an error or has no invocations

        Raises:
            InvocationError: A requested tool is not registered
            ToolExecutionError: A tool raised
            TurnLimitExceeded: The model requested tools more than `max_turns` times
        """
        turns = 0
        while result.ok and result.response is not None and result.response.invocations:
            if turns >= self.max_turns:
                logger.error(f"Turn limit of {self.max_turns} reached")
                raise TurnLimitExceeded(self.max_turns, result.conversation)
            turns += 1

            conversation = await self._answer_invocations(
                result.response.invocations, result.conversation
            )
            logger.debug(f"Resending conversation with tool results (round {turns})")
            result = await self.send_turn(conversation)

        return result

    async def run(self, conversation: Conversation) -> TurnResult:
        """Send a conversation and drive the tool loop to completion."""
        return await self.process_invocations(await self.send_turn(conversation))
