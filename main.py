#!/usr/bin/env python3
"""
Main entry point for the Twitch IRC chat client
"""

import logging
import sys
import threading
import time

from twitch_chat.config import EnvCredentialsProvider, load_chat_config
from twitch_chat.constants import PUMP_INTERVAL_SECONDS
from twitch_chat.errors import ChatError, log_error
from twitch_chat.irc import ChatEntry, ConnectionManager, StatusKind
from twitch_chat.logging_config import LoggerConfigurator
from twitch_chat.logs import logger

USAGE = "Commands: /quit, /reconnect, /raw <line>; anything else is sent to chat"


def print_entry(entry: ChatEntry) -> None:
    print(entry.render(), flush=True)


def print_status(kind: StatusKind, message: str) -> None:
    print(f"[{kind.value}] {message}", flush=True)


def handle_input_line(client: ConnectionManager, line: str) -> bool:
    """Apply one line of user input. Returns ``False`` when the user quits."""
    text = line.strip()
    if not text:
        return True
    if text == "/quit":
        return False
    if text == "/reconnect":
        client.disconnect(reconnect=True)
    elif text.startswith("/raw "):
        client.send_raw_command(text[5:])
    else:
        client.send_message(text)
    return True


def read_stdin(client: ConnectionManager, stop: threading.Event) -> None:
    for line in sys.stdin:
        if not handle_input_line(client, line):
            break
    stop.set()


def run(client: ConnectionManager) -> None:
    """Connect and drive the consumer loop until the user quits."""
    client.on_chat_entry(print_entry)
    client.on_status(print_status)

    stop = threading.Event()
    if not client.try_connect():
        client.pump()
        return

    print(USAGE, flush=True)
    threading.Thread(
        target=read_stdin, args=(client, stop), name="stdin", daemon=True
    ).start()
    try:
        while not stop.is_set():
            client.pump()
            time.sleep(PUMP_INTERVAL_SECONDS)
    finally:
        client.disconnect()
        client.pump()


def main() -> int:
    """Main function"""
    LoggerConfigurator().configure()
    logger.log_event("app", "start")
    try:
        config = load_chat_config()
        provider = EnvCredentialsProvider()
        run(ConnectionManager(config, credentials_provider=provider))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted")
    except ChatError as e:
        log_error("Startup failed", e)
        return 1
    finally:
        logger.log_event("app", "shutdown")
    return 0


def health_check() -> int:
    LoggerConfigurator().configure()
    try:
        load_chat_config()
    except ChatError as e:
        logger.log_event("app", "health_check_failed", level=logging.ERROR, error=str(e))
        return 1
    credentials = EnvCredentialsProvider().get_credentials()
    missing = credentials.missing_fields()
    if missing:
        logger.log_event(
            "app", "health_check_failed", level=logging.ERROR, error=f"missing {', '.join(missing)}"
        )
        return 1
    logger.log_event("app", "health_check_ok", **credentials.redacted())
    return 0


if __name__ == "__main__":
    # Simple health check mode
    if len(sys.argv) > 1 and sys.argv[1] == "--health-check":
        sys.exit(health_check())
    sys.exit(main())
