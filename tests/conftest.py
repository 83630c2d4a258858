import pytest

from tests.fixtures.fake_io import FakeClock, FakeSocket
from twitch_chat.config import ChatConfig, Credentials
from twitch_chat.logging_config import error_aggregator


@pytest.fixture(autouse=True)
def clean_error_tally():
    error_aggregator.reset()
    yield
    error_aggregator.reset()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_socket():
    return FakeSocket()


@pytest.fixture
def credentials():
    return Credentials(token="abc123", nickname="TestUser", channel="#TestChannel")


@pytest.fixture
def fast_config():
    """Config with short timeouts and no throttle so threaded tests stay quick."""
    return ChatConfig(
        host="irc.test.local",
        port=6667,
        max_messages=5,
        throttle_interval=0.0,
        connect_timeout=1.0,
        read_timeout=0.05,
        join_timeout=1.0,
        auto_reconnect=True,
        reconnect_max_attempts=2,
        reconnect_backoff_base=0.0,
        reconnect_backoff_max=0.0,
    )
