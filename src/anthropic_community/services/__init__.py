"""Turn logic for anthropic-community.

This package contains the response classifier and the turn driver that
runs the send / classify / invoke loop.
"""

from anthropic_community.services.response import Response, Usage, parse_response
from anthropic_community.services.turns import TurnDriver, TurnResult

__all__ = [
    "Response",
    "TurnDriver",
    "TurnResult",
    "Usage",
    "parse_response",
]
