"""
Adapter between the chat transport and the intake pipeline.

The transport process (WhatsApp session, QR pairing, reconnection) runs
elsewhere and forwards downloaded images to ``POST /intake``. This package
turns what it forwards into an explicit message type.
"""

from .messages import (
    IgnoredMessage,
    ImageMessage,
    InboundMessage,
    extension_from_mime,
    to_inbound_message,
)

__all__ = [
    "IgnoredMessage",
    "ImageMessage",
    "InboundMessage",
    "extension_from_mime",
    "to_inbound_message",
]
