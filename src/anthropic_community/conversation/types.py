"""Data types for conversations.

This module defines content blocks and messages. Messages always hold a
list of content blocks, even when built from a single string.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

Role = Literal["user", "assistant"]
ROLES: tuple[str, ...] = ("user", "assistant")


@dataclass(frozen=True)
class TextBlock:
    """A text content block."""

    text: str
    type: str = field(default="text", init=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API content block format."""
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImageBlock:
    """A base64 encoded image content block."""

    media_type: str
    data: str
    type: str = field(default="image", init=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API content block format."""
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": self.media_type,
                "data": self.data,
            },
        }


ContentBlock = TextBlock | ImageBlock


def content_block_from_dict(data: dict[str, Any]) -> ContentBlock | None:
    """Convert an API content block dict to a ContentBlock.

    Returns:
        The block, or None for block types this client does not model
    """
    block_type = data.get("type")
    if block_type == "text":
        return TextBlock(text=data.get("text", ""))
    if block_type == "image":
        source = data.get("source") or {}
        return ImageBlock(
            media_type=source.get("media_type", ""),
            data=source.get("data", ""),
        )
    return None


def normalize_content(content: Any) -> list[ContentBlock]:
    """Normalize message content to a list of content blocks.

    Accepts a string, a single block, or a list of strings and blocks.

    Raises:
        TypeError: If the content contains anything else
    """
    if isinstance(content, (str, TextBlock, ImageBlock)):
        content = [content]
    if not isinstance(content, (list, tuple)):
        raise TypeError(f"Unsupported message content: {type(content).__name__}")

    blocks: list[ContentBlock] = []
    for item in content:
        if isinstance(item, str):
            blocks.append(TextBlock(text=item))
        elif isinstance(item, (TextBlock, ImageBlock)):
            blocks.append(item)
        else:
            raise TypeError(f"Unsupported content block: {type(item).__name__}")
    return blocks


@dataclass(frozen=True)
class Message:
    """A conversation message: a role plus a list of content blocks."""

    role: Role
    content: list[ContentBlock]

    def __post_init__(self) -> None:
        """Validate the role and normalize content to a list of blocks."""
        if self.role not in ROLES:
            raise ValueError(f"Unknown message role: {self.role}")
        object.__setattr__(self, "content", normalize_content(self.content))

    @property
    def text(self) -> str:
        """Concatenated text of all text blocks."""
        return "".join(b.text for b in self.content if isinstance(b, TextBlock))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API message format."""
        return {
            "role": self.role,
            "content": [block.to_dict() for block in self.content],
        }
