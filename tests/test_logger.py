"""
Tests for the event-template logger
"""

import logging

import pytest

from twitch_chat.logs import EVENT_TEMPLATES, ChatLogger


@pytest.fixture
def chat_logger(caplog, monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    caplog.set_level(logging.DEBUG, logger="test_chat")
    return ChatLogger("test_chat")


def _messages(caplog):
    return [r.getMessage() for r in caplog.records if r.name == "test_chat"]


class TestTemplates:
    """Test catalog lookup and formatting"""

    def test_catalog_loaded(self):
        assert EVENT_TEMPLATES[("irc", "privmsg")] == "{sender}: {body}"
        assert ("app", "load_error") not in EVENT_TEMPLATES

    def test_template_formatted_with_context(self, chat_logger, caplog):
        chat_logger.log_event("irc", "connecting", host="irc.test", port=6667)
        message = _messages(caplog)[0]
        assert message.startswith("[system ")
        assert message.endswith("] Connecting to irc.test:6667")

    def test_missing_placeholder_falls_back_to_raw_template(self, chat_logger, caplog):
        chat_logger.log_event("irc", "connecting")
        assert _messages(caplog)[0].endswith("Connecting to {host}:{port}")

    def test_unknown_event_derives_text(self, chat_logger, caplog):
        chat_logger.log_event("custom_domain", "did_thing")
        assert _messages(caplog)[0].endswith("custom domain: did thing")

    def test_explicit_human_text(self, chat_logger, caplog):
        chat_logger.log_event("app", "custom", human="Interrupted by user")
        assert _messages(caplog)[0].endswith("Interrupted by user")


class TestPrefix:
    """Test the aligned user/channel prefix"""

    def test_user_and_channel_prefix(self, chat_logger, caplog):
        chat_logger.log_event("irc", "connected", user="nick", channel="chan")
        assert _messages(caplog)[0].startswith("[nick#chan")

    def test_long_prefix_truncated(self, chat_logger, caplog):
        chat_logger.log_event("irc", "connected", user="a" * 40)
        assert _messages(caplog)[0].startswith("[" + "a" * 24 + "]")

    def test_privmsg_gets_channel(self, chat_logger, caplog):
        chat_logger.log_event(
            "irc", "privmsg", user="me", channel="chan", sender="viewer", body="hi"
        )
        assert _messages(caplog)[0].endswith("#chan viewer: hi")


class TestLevels:
    """Test level handling and debug rendering"""

    def test_disabled_level_skipped(self, caplog, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        caplog.set_level(logging.WARNING, logger="test_chat")
        ChatLogger("test_chat").log_event("irc", "ping", level=logging.DEBUG)
        assert _messages(caplog) == []

    def test_level_passed_through(self, chat_logger, caplog):
        chat_logger.log_event("irc", "read_failed", level=logging.WARNING)
        assert caplog.records[-1].levelno == logging.WARNING

    def test_debug_mode_includes_event_and_context(self, chat_logger, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        chat_logger.log_event("outbound", "send", user="me", command="JOIN #chan")
        message = _messages(caplog)[0]
        assert message.startswith("outbound_send")
        assert "Sent JOIN #chan" in message
        assert "(command=JOIN #chan)" in message

    def test_debug_mode_truncates_long_event_names(self, chat_logger, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        chat_logger.log_event("irc", "reconnect_backoff_wait", wait=1.5)
        assert _messages(caplog)[0].startswith("irc_reconnect_backoff_wait  ")
        chat_logger.log_event("some_long_domain", "with_a_long_action_name")
        assert _messages(caplog)[1].split(" ")[0].endswith("~")
