"""
Tests for the chat message filters in receipt_ledger.transport.
"""

from receipt_ledger.transport import IgnoredMessage, ImageMessage, to_inbound_message
from receipt_ledger.transport.messages import (
    extension_from_mime,
    is_broadcast_chat,
    safe_jid,
)

GROUP = "120363000000000000@g.us"


def _message(**overrides):
    kwargs = {
        "data": b"image-bytes",
        "content_type": "image/png",
        "group_jid": GROUP,
        "chat_id": GROUP,
    }
    kwargs.update(overrides)
    return to_inbound_message(**kwargs)


class TestToInboundMessage:

    def test_image_from_configured_group_is_accepted(self):
        message = _message(sender="5511999999999@s.whatsapp.net")

        assert isinstance(message, ImageMessage)
        assert message.extension == "png"
        assert message.mime_type == "image/png"
        assert message.data == b"image-bytes"

    def test_own_message_is_ignored(self):
        message = _message(from_me=True)
        assert message == IgnoredMessage("own message", GROUP)

    def test_message_sent_before_startup_is_ignored(self):
        message = _message(timestamp=1_700_000_000, started_at=1_700_000_100)
        assert isinstance(message, IgnoredMessage)
        assert message.reason == "sent before startup"

    def test_broadcast_and_newsletter_chats_are_ignored(self):
        for chat_id in ["status@broadcast", "123@newsletter", "abc"]:
            message = _message(chat_id=chat_id)
            assert message.reason == "broadcast chat"

    def test_debug_mode_without_group_jid_processes_nothing(self):
        message = _message(group_jid="")
        assert isinstance(message, IgnoredMessage)
        assert message.reason.startswith("debug mode")

    def test_other_chat_is_ignored(self):
        message = _message(chat_id="999999999999999999@g.us")
        assert message.reason == "other chat"

    def test_non_image_is_ignored(self):
        message = _message(content_type="application/pdf")
        assert message.reason == "not an image"

    def test_manual_upload_without_chat_id_skips_chat_filters(self):
        message = _message(chat_id=None, group_jid="")
        assert isinstance(message, ImageMessage)

    def test_content_type_parameters_are_dropped(self):
        message = _message(content_type="image/jpeg; charset=binary")
        assert message.mime_type == "image/jpeg"
        assert message.extension == "jpg"


class TestHelpers:

    def test_extension_from_mime(self):
        assert extension_from_mime("image/webp") == "webp"
        assert extension_from_mime("image/x-unknown") == "jpg"
        assert extension_from_mime(None) == "jpg"

    def test_safe_jid_replaces_unexpected_characters(self):
        assert safe_jid("12 3@g.us\n") == "12_3@g.us_"
        assert safe_jid(None) == "unknown"

    def test_group_chat_is_not_broadcast(self):
        assert is_broadcast_chat(GROUP) is False
