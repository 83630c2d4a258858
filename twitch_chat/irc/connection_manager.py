"""Connection lifecycle for the Twitch IRC gateway.

``ConnectionManager`` owns the socket, the reader/writer worker threads and
the connection state machine::

    DISCONNECTED -> CONNECTING -> AUTHENTICATING -> JOINED -> DISCONNECTED

Every failure is turned into a ``ConnectionStatusEvent``; nothing raises
across the consumer boundary. Worker threads never call consumer callbacks
directly: they post to an ``EventInbox`` that the consumer drains with
``pump()``.
"""

from __future__ import annotations

import logging
import socket
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    stop_when_event_set,
    wait_exponential,
)

from ..config import ChatConfig, Credentials, CredentialsProvider
from ..errors import ChatError, ConfigError, ConnectError, ReadError, log_error
from ..logging_config import error_aggregator
from ..logs.logger import logger
from .inbound import InboundLoop
from .inbox import EventInbox
from .line_buffer import LineBuffer
from .models import (
    BufferReset,
    ChatEntry,
    ChatMessage,
    ConnectionState,
    ConnectionStatusEvent,
    OutboundCommand,
    StatusKind,
    format_display_name,
)
from .outbound import OutboundLoop
from .rate_limited_queue import RateLimitedQueue
from .worker import IRCWorker

ChatEntryCallback = Callable[[ChatEntry], None]
StatusCallback = Callable[[StatusKind, str], None]


@dataclass
class _Session:
    sock: socket.socket
    credentials: Credentials
    stop_event: threading.Event
    inbound: InboundLoop | None = None
    outbound: OutboundLoop | None = None


class ConnectionManager:
    """Single-channel Twitch IRC connection with a throttled outbound queue.

    Args:
        config: Runtime configuration; defaults come from the environment.
        credentials_provider: Used by ``try_connect()`` when no credentials
            are passed explicitly.
        clock: Monotonic clock for the outbound throttle.
    """

    def __init__(
        self,
        config: ChatConfig | None = None,
        credentials_provider: CredentialsProvider | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or ChatConfig()
        self.credentials_provider = credentials_provider
        self.queue = RateLimitedQueue(self.config.throttle_interval, clock=clock)
        self.inbox = EventInbox()
        self._messages = LineBuffer(self.config.max_messages)
        self._lock = threading.RLock()
        self._state = ConnectionState.DISCONNECTED
        self._session: _Session | None = None
        self._credentials: Credentials | None = None
        self._chat_listeners: list[ChatEntryCallback] = []
        self._status_listeners: list[StatusCallback] = []
        self._reconnect_cancel = threading.Event()

    # ------------------------------------------------------------------ #
    # Consumer-facing surface
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> ConnectionState:
        with self._lock:
            return self._state

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.JOINED

    @property
    def messages(self) -> LineBuffer:
        return self._messages

    @property
    def credentials(self) -> Credentials | None:
        with self._lock:
            return self._credentials

    def on_chat_entry(self, callback: ChatEntryCallback) -> ChatEntryCallback:
        self._chat_listeners.append(callback)
        return callback

    def on_status(self, callback: StatusCallback) -> StatusCallback:
        self._status_listeners.append(callback)
        return callback

    def try_connect(self, credentials: Credentials | None = None) -> bool:
        """Open the connection and start the I/O workers.

        Failures are reported as ``Error`` status events; returns ``True``
        only when the socket is open and registration has been sent.
        """
        try:
            return self._connect(self._resolve_credentials(credentials))
        except ChatError:
            return False

    def disconnect(self, reconnect: bool = False) -> None:
        """Stop the workers, close the socket and clear the chat history.

        No-op when already disconnected. With ``reconnect`` the same
        credentials are used for a new connection right away.
        """
        detached, session = self._detach(cancel_reconnect=not reconnect)
        if not detached:
            return
        credentials = session.credentials if session else self.credentials
        self._teardown(session)
        if reconnect and credentials is not None:
            self._reconnect(credentials)
        else:
            error_aggregator.log_summary_report()
            error_aggregator.reset()

    def send_message(self, text: str) -> bool:
        """Queue a chat message for the joined channel."""
        if not text or not text.strip():
            logger.log_event("outbound", "blank_message", level=logging.DEBUG)
            return False
        credentials = self._active_credentials()
        if credentials is None:
            return False
        self.queue.enqueue_chat_message(credentials.channel, text)
        return True

    def send_raw_command(self, text: str) -> bool:
        """Queue a raw IRC line; it goes through the same throttle."""
        if not text or not text.strip():
            return False
        if self._active_credentials() is None:
            return False
        self.queue.enqueue_command(text.strip())
        return True

    def pump(self) -> int:
        """Deliver pending worker events on the calling (consumer) thread.

        Chat messages become ``ChatEntry`` values in the line buffer and are
        passed to chat listeners; status events go to status listeners.
        Returns the number of events processed.
        """
        events = self.inbox.drain()
        for event in events:
            if isinstance(event, ChatMessage):
                self._add_entry(ChatEntry.from_message(event))
            elif isinstance(event, ChatEntry):
                self._add_entry(event)
            elif isinstance(event, BufferReset):
                self._messages.clear()
            elif isinstance(event, ConnectionStatusEvent):
                for status_cb in list(self._status_listeners):
                    self._notify(status_cb, event.kind, event.message)
        return len(events)

    def __enter__(self) -> ConnectionManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()

    # ------------------------------------------------------------------ #
    # Connect
    # ------------------------------------------------------------------ #
    def _resolve_credentials(self, credentials: Credentials | None) -> Credentials:
        if credentials is not None:
            return credentials
        if self.credentials_provider is not None:
            return self.credentials_provider.get_credentials()
        return Credentials()

    def _connect(self, credentials: Credentials) -> bool:
        missing = credentials.missing_fields()
        if missing:
            error = ConfigError(
                "Twitch credentials not fully filled out!", data={"missing": missing}
            )
            log_error("Cannot connect", error)
            self._emit_status(
                StatusKind.ERROR,
                f"Twitch credentials not fully filled out! (missing: {', '.join(missing)})",
            )
            raise error

        with self._lock:
            if self._state is not ConnectionState.DISCONNECTED:
                logger.log_event(
                    "irc",
                    "connect_rejected",
                    level=logging.WARNING,
                    user=credentials.login,
                    state=self._state.name.lower(),
                )
                return False
            self._state = ConnectionState.CONNECTING
            self._credentials = credentials

        host, port = self.config.host, self.config.port
        logger.log_event(
            "irc",
            "connecting",
            user=credentials.login,
            channel=credentials.channel,
            host=host,
            port=port,
        )
        self._emit_status(StatusKind.NORMAL, "Attempting to connect...")

        try:
            sock = socket.create_connection(
                (host, port), timeout=self.config.connect_timeout
            )
        except OSError as e:
            raise self._connect_failed(credentials, e) from e
        try:
            sock.settimeout(self.config.read_timeout)
            # Pre-registration lines bypass the throttle.
            sock.sendall(
                f"PASS {credentials.token}\r\nNICK {credentials.login}\r\n".encode(
                    "utf-8"
                )
            )
        except OSError as e:
            self._close_quietly(sock)
            raise self._connect_failed(credentials, e) from e

        session = _Session(
            sock=sock, credentials=credentials, stop_event=threading.Event()
        )
        session.inbound = InboundLoop(
            sock,
            self.queue,
            credentials.channel,
            session.stop_event,
            on_chat=lambda message: self._handle_chat(session, message),
            on_registered=lambda: self._handle_registered(session),
            on_failure=lambda worker, error: self._handle_io_failure(
                session, worker, error
            ),
            user=credentials.login,
        )
        session.outbound = OutboundLoop(
            sock,
            self.queue,
            session.stop_event,
            on_self_message=lambda command: self._handle_self_message(
                session, command
            ),
            on_failure=lambda worker, error: self._handle_io_failure(
                session, worker, error
            ),
            user=credentials.login,
        )

        with self._lock:
            if self._state is not ConnectionState.CONNECTING:
                # disconnect() ran while the socket was opening
                self._close_quietly(sock)
                return False
            self._session = session
            self._state = ConnectionState.AUTHENTICATING

        session.inbound.start()
        session.outbound.start()
        logger.log_event(
            "irc", "connected", user=credentials.login, channel=credentials.channel
        )
        return True

    def _connect_failed(self, credentials: Credentials, cause: OSError) -> ConnectError:
        with self._lock:
            self._state = ConnectionState.DISCONNECTED
        error = ConnectError(
            "Failed to connect to the Twitch IRC!",
            data={"host": self.config.host, "port": self.config.port},
        )
        logger.log_event(
            "irc",
            "connect_failed",
            level=logging.WARNING,
            user=credentials.login,
            host=self.config.host,
            port=self.config.port,
        )
        log_error("Connect failed", cause, context={"host": self.config.host})
        self._emit_status(StatusKind.ERROR, str(error))
        return error

    # ------------------------------------------------------------------ #
    # Worker callbacks
    # ------------------------------------------------------------------ #
    def _is_current(self, session: _Session) -> bool:
        with self._lock:
            return self._session is session

    def _handle_chat(self, session: _Session, message: ChatMessage) -> None:
        if not self._is_current(session):
            return
        logger.log_event(
            "irc",
            "privmsg",
            level=logging.DEBUG,
            user=session.credentials.login,
            channel=message.channel,
            sender=message.sender,
            body=message.body,
        )
        self.inbox.put(message)

    def _handle_registered(self, session: _Session) -> None:
        with self._lock:
            if self._session is not session:
                return
            self._state = ConnectionState.JOINED
        channel = session.credentials.channel
        logger.log_event(
            "irc", "registered", user=session.credentials.login, channel=channel
        )
        self._emit_status(
            StatusKind.SUCCESS,
            f"We have successfully connected! Now joining #{channel}...",
        )

    def _handle_self_message(self, session: _Session, command: OutboundCommand) -> None:
        if not self._is_current(session):
            return
        self.inbox.put(
            ChatEntry(
                timestamp=datetime.now(),
                display_name=format_display_name(session.credentials.nickname),
                body=command.body,
                is_self=True,
            )
        )

    def _handle_io_failure(
        self, session: _Session, worker: IRCWorker, error: ReadError
    ) -> None:
        # Only a live session in AUTHENTICATING/JOINED counts as a failure;
        # anything else is the tail of an intentional stop.
        detached, _ = self._detach(expected=session)
        if not detached:
            return
        log_error("Connection lost", error, context={"worker": worker.name})
        logger.log_event(
            "irc",
            "read_failed" if worker.name == "inbound" else "write_failed",
            level=logging.WARNING,
            user=session.credentials.login,
            channel=session.credentials.channel,
        )
        self._emit_status(StatusKind.ERROR, str(error))
        self._teardown(session)
        if self.config.auto_reconnect:
            self._reconnect(session.credentials)

    # ------------------------------------------------------------------ #
    # Disconnect / reconnect
    # ------------------------------------------------------------------ #
    def _detach(
        self, expected: _Session | None = None, cancel_reconnect: bool = False
    ) -> tuple[bool, _Session | None]:
        """Atomically move to DISCONNECTED and take ownership of the session.

        The reconnect cancel flag is set or re-armed under the same lock, so
        a user disconnect racing a failure teardown always wins.
        """
        with self._lock:
            if cancel_reconnect:
                self._reconnect_cancel.set()
            if self._state is ConnectionState.DISCONNECTED:
                return False, None
            if expected is not None and self._session is not expected:
                return False, None
            if not cancel_reconnect:
                self._reconnect_cancel.clear()
            session = self._session
            self._session = None
            self._state = ConnectionState.DISCONNECTED
            return True, session

    def _teardown(self, session: _Session | None) -> None:
        user = session.credentials.login if session else None
        if session is not None:
            session.stop_event.set()
            self.queue.wake()
            try:
                session.sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass  # already closed by the peer
            for worker in (session.inbound, session.outbound):
                if worker is None:
                    continue
                if not worker.join(self.config.join_timeout):
                    logger.log_event(
                        "irc",
                        "worker_join_timeout",
                        level=logging.WARNING,
                        user=user,
                        worker=worker.name,
                        timeout=self.config.join_timeout,
                    )
            self._close_quietly(session.sock)

        self.queue.clear()
        self.inbox.discard(lambda event: isinstance(event, ChatMessage | ChatEntry))
        self.inbox.put(BufferReset())
        logger.log_event("irc", "disconnected", user=user)
        self._emit_status(StatusKind.NORMAL, "Disconnected from Twitch IRC")

    def _reconnect(self, credentials: Credentials) -> bool:
        """Reconnect with bounded attempts and exponential backoff.

        The first attempt is immediate. A user ``disconnect()`` cancels the
        remaining attempts.
        """
        if self._reconnect_cancel.is_set():
            logger.log_event("irc", "reconnect_cancelled", user=credentials.login)
            return False
        max_attempts = self.config.reconnect_max_attempts

        def _before(retry_state: RetryCallState) -> None:
            error_aggregator.record_reconnect()
            logger.log_event(
                "irc",
                "reconnect_attempt",
                user=credentials.login,
                attempt=retry_state.attempt_number,
                max_attempts=max_attempts,
            )

        def _before_sleep(retry_state: RetryCallState) -> None:
            wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
            logger.log_event(
                "irc",
                "reconnect_backoff_wait",
                level=logging.DEBUG,
                user=credentials.login,
                wait=wait,
            )

        retrying = Retrying(
            stop=stop_after_attempt(max_attempts)
            | stop_when_event_set(self._reconnect_cancel),
            wait=wait_exponential(
                multiplier=self.config.reconnect_backoff_base,
                max=self.config.reconnect_backoff_max,
            ),
            retry=retry_if_exception_type(ConnectError),
            sleep=self._reconnect_cancel.wait,
            before=_before,
            before_sleep=_before_sleep,
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    if self._reconnect_cancel.is_set():
                        logger.log_event("irc", "reconnect_cancelled", user=credentials.login)
                        return False
                    return self._connect(credentials)
        except ConnectError:
            if self._reconnect_cancel.is_set():
                logger.log_event("irc", "reconnect_cancelled", user=credentials.login)
                return False
            logger.log_event(
                "irc",
                "reconnect_exhausted",
                level=logging.ERROR,
                user=credentials.login,
                attempts=max_attempts,
            )
            self._emit_status(
                StatusKind.ERROR,
                f"Giving up after {max_attempts} reconnect attempts",
            )
        except ConfigError:
            pass  # already reported as a status event
        return False

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _active_credentials(self) -> Credentials | None:
        with self._lock:
            if self._state is ConnectionState.DISCONNECTED or self._credentials is None:
                logger.log_event("outbound", "message_dropped", level=logging.WARNING)
                return None
            return self._credentials

    def _add_entry(self, entry: ChatEntry) -> None:
        self._messages.append(entry)
        for chat_cb in list(self._chat_listeners):
            self._notify(chat_cb, entry)

    @staticmethod
    def _notify(callback: Callable[..., None], *args: object) -> None:
        # A failing listener must not lose the rest of a drained batch.
        try:
            callback(*args)
        except Exception as e:
            name = getattr(callback, "__name__", repr(callback))
            log_error("Consumer callback failed", e, context={"callback": name})

    def _emit_status(self, kind: StatusKind, message: str) -> None:
        logger.log_event(
            "status",
            kind.value,
            level=logging.ERROR if kind is StatusKind.ERROR else logging.INFO,
            message=message,
        )
        self.inbox.put(ConnectionStatusEvent(kind, message))

    @staticmethod
    def _close_quietly(sock: socket.socket) -> None:
        try:
            sock.close()
        except OSError:
            pass
