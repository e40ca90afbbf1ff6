"""Unit tests for the command-line interface."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from anthropic_community.__main__ import build_parser, run
from anthropic_community.conversation import TextBlock
from anthropic_community.errors import ServerError
from anthropic_community.services import Response, TurnResult


def test_parser_options():
    """Test parsing of repeatable and optional arguments."""
    args = build_parser().parse_args(
        ["Hello", "--tool", "support.Weather", "--tool", "support.Adder", "--max-tokens", "50"]
    )

    assert args.prompt == "Hello"
    assert args.tool == ["support.Weather", "support.Adder"]
    assert args.max_tokens == 50
    assert args.image == []
    assert args.model is None


@pytest.fixture
def mock_driver():
    """Patch the client and driver used by the CLI."""
    with (
        patch("anthropic_community.__main__.AnthropicClient") as client_class,
        patch("anthropic_community.__main__.TurnDriver") as driver_class,
    ):
        client_class.return_value.__aenter__ = AsyncMock(return_value=MagicMock())
        client_class.return_value.__aexit__ = AsyncMock(return_value=None)
        driver = MagicMock()
        driver.run = AsyncMock()
        driver_class.return_value = driver
        yield driver


@pytest.mark.asyncio
async def test_run_prints_reply(mock_driver, test_settings, capsys):
    """Test that the final reply text is printed."""
    response = Response(id="msg_1", role="assistant", content=[TextBlock("Bonjour")], model="m")
    mock_driver.run.return_value = TurnResult(conversation=MagicMock(), response=response)
    args = build_parser().parse_args(["Hello", "--system", "Be brief.", "--tool", "support.Weather"])

    exit_code = await run(args, test_settings)

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "Bonjour"
    conversation = mock_driver.run.await_args.args[0]
    assert conversation.system == "Be brief."
    assert "Weather" in conversation.tools
    assert conversation.messages[-1].text == "Hello"


@pytest.mark.asyncio
async def test_run_reports_api_error(mock_driver, test_settings, capsys):
    """Test that an API error gives a non-zero exit code."""
    mock_driver.run.return_value = TurnResult(
        conversation=MagicMock(), error=ServerError(500, "oops", "Server error 500")
    )

    exit_code = await run(build_parser().parse_args(["Hello"]), test_settings)

    assert exit_code == 1
    assert "Server error 500" in capsys.readouterr().err
