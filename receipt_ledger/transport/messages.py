"""
Inbound chat messages as a tagged union.

``to_inbound_message`` applies the chat filters once and returns either an
``ImageMessage`` for the pipeline or an ``IgnoredMessage`` saying why it was
dropped. Nothing downstream inspects raw payload fields.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from receipt_ledger.utils.constants import DEFAULT_MIME_TYPE, MIME_EXTENSIONS

logger = logging.getLogger(__name__)

_UNSAFE_JID_CHARS = re.compile(r"[^a-zA-Z0-9@._-]")


@dataclass(frozen=True)
class ImageMessage:
    data: bytes
    mime_type: str
    extension: str
    chat_id: Optional[str] = None
    sender: Optional[str] = None


@dataclass(frozen=True)
class IgnoredMessage:
    reason: str
    chat_id: Optional[str] = None


InboundMessage = Union[ImageMessage, IgnoredMessage]


def extension_from_mime(mime_type: Optional[str]) -> str:
    """File extension (without dot) for an image MIME type, "jpg" by default."""
    if not mime_type:
        return "jpg"
    base = mime_type.split(";")[0].strip().lower()
    return MIME_EXTENSIONS.get(base, "jpg")


def safe_jid(jid: Optional[str]) -> str:
    """Chat id with anything outside [a-zA-Z0-9@._-] replaced, for logs."""
    return _UNSAFE_JID_CHARS.sub("_", jid or "unknown")


def is_broadcast_chat(jid: str) -> bool:
    """Status updates, newsletters and broadcast lists are never receipts."""
    if len(jid) < 5:
        return True
    return (
        jid == "status@broadcast"
        or jid.endswith("@broadcast")
        or jid.endswith("@newsletter")
    )


def to_inbound_message(
    data: bytes,
    content_type: Optional[str],
    group_jid: str,
    chat_id: Optional[str] = None,
    sender: Optional[str] = None,
    from_me: bool = False,
    timestamp: Optional[int] = None,
    started_at: Optional[int] = None,
) -> InboundMessage:
    """
    Decide whether a forwarded message goes to the pipeline.

    Chat filters only apply when the transport says which chat the message
    came from; an upload without ``chat_id`` is a manual submission and goes
    straight through.

    With no ``group_jid`` configured the service runs in debug mode: chat ids
    are logged so the operator can copy the right one, and nothing is
    processed.
    """
    if from_me:
        return IgnoredMessage("own message", chat_id)

    if timestamp and started_at and timestamp < started_at:
        return IgnoredMessage("sent before startup", chat_id)

    if chat_id is not None:
        if is_broadcast_chat(chat_id):
            return IgnoredMessage("broadcast chat", chat_id)

        if not group_jid:
            logger.info(
                f"[DEBUG] Message received from chat_id={safe_jid(chat_id)} "
                f"(group={chat_id.endswith('@g.us')}). "
                "Copy this chat_id into GROUP_JID in your .env file."
            )
            return IgnoredMessage("debug mode: GROUP_JID not configured", chat_id)

        if chat_id != group_jid:
            logger.debug(f"Message from another chat ignored: chat_id={safe_jid(chat_id)}")
            return IgnoredMessage("other chat", chat_id)

    mime_type = (content_type or "").split(";")[0].strip().lower()
    if not mime_type.startswith("image/"):
        return IgnoredMessage("not an image", chat_id)

    return ImageMessage(
        data=data,
        mime_type=mime_type or DEFAULT_MIME_TYPE,
        extension=extension_from_mime(mime_type),
        chat_id=chat_id,
        sender=sender,
    )
