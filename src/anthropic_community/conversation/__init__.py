"""Conversation state for anthropic-community.

This package provides the immutable Conversation value, message and
content block types, and image processing for image content.
"""

from anthropic_community.conversation.conversation import Conversation, new_conversation
from anthropic_community.conversation.image import process_image
from anthropic_community.conversation.types import (
    ContentBlock,
    ImageBlock,
    Message,
    Role,
    TextBlock,
    content_block_from_dict,
)

__all__ = [
    # Core classes
    "Conversation",
    "new_conversation",
    # Message types
    "Message",
    "Role",
    "ContentBlock",
    "TextBlock",
    "ImageBlock",
    "content_block_from_dict",
    # Images
    "process_image",
]
