"""Notification transports — SMTP email and chat webhook delivery."""

from __future__ import annotations

import abc
import asyncio
import smtplib
from collections.abc import Sequence
from email.message import EmailMessage
from email.utils import make_msgid

import aiohttp
import structlog

from src.core.config import SmtpTransportConfig
from src.core.exceptions import TransportError
from src.notify.types import DeliveryOutcome, RenderedMessage

logger = structlog.get_logger(__name__)

EMAIL_FOOTER = [
    "-" * 69,
    "This is an automated email sent from Uptime. Please don't reply to it.",
]

DEFAULT_WEBHOOK_TIMEOUT_MS = 2000


class Transport(abc.ABC):
    """Base class for delivery mechanisms.

    ``send`` never raises: every failure is reported as an unsuccessful
    DeliveryOutcome.
    """

    channel: str = ""

    @abc.abstractmethod
    async def send(self, destination: str | Sequence[str], message: RenderedMessage) -> DeliveryOutcome:
        """Deliver *message* to *destination* in a single attempt."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release resources (HTTP sessions, etc.)."""


def parse_recipients(destination: str | Sequence[str]) -> list[str]:
    """Normalise ``"a@x, b@x"`` or ``["a@x", "b@x"]`` into a list of addresses."""
    if isinstance(destination, str):
        parts: Sequence[str] = destination.split(",")
    else:
        parts = destination
    return [p.strip() for p in parts if p and p.strip()]


class EmailTransport(Transport):
    """Delivers notifications by SMTP.

    smtplib is blocking, so each send runs in a worker thread.
    """

    channel = "email"

    def __init__(self, config: SmtpTransportConfig, from_address: str = "") -> None:
        self._config = config
        self._from = from_address or config.username

    def build_message(self, recipients: list[str], message: RenderedMessage) -> EmailMessage:
        msg = EmailMessage()
        # Header values may not contain line breaks.
        msg["Subject"] = " ".join(message.title.split())
        msg["From"] = self._from
        msg["To"] = ", ".join(recipients)
        msg["Message-ID"] = make_msgid()
        msg.set_content("\n".join([*message.lines, *EMAIL_FOOTER]))
        return msg

    def _deliver(self, recipients: list[str], message: RenderedMessage) -> None:
        cfg = self._config
        try:
            # make_msgid resolves the host name, so the message is built off the loop too.
            msg = self.build_message(recipients, message)
        except (ValueError, TypeError) as exc:
            raise TransportError(f"invalid email message: {exc}") from exc
        try:
            with smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout_secs) as client:
                if cfg.use_tls:
                    client.starttls()
                if cfg.username:
                    client.login(cfg.username, cfg.password.get_secret_value())
                client.send_message(msg, to_addrs=recipients)
        except smtplib.SMTPAuthenticationError as exc:
            raise TransportError(f"SMTP authentication failed: {exc}") from exc
        except smtplib.SMTPRecipientsRefused as exc:
            raise TransportError(f"recipients rejected: {exc}") from exc
        except smtplib.SMTPException as exc:
            raise TransportError(f"SMTP error: {exc}") from exc
        except OSError as exc:
            raise TransportError(f"SMTP connection failed: {exc}") from exc

    async def send(self, destination: str | Sequence[str], message: RenderedMessage) -> DeliveryOutcome:
        recipients = parse_recipients(destination)
        if not recipients:
            return DeliveryOutcome.failed("email destination is empty")

        try:
            await asyncio.to_thread(self._deliver, recipients, message)
        except TransportError as exc:
            return DeliveryOutcome.failed(str(exc))

        logger.debug("email_sent", recipients=len(recipients), subject=message.title)
        return DeliveryOutcome.ok()

    async def close(self) -> None:
        # Connections are opened per send.
        return None


class WebhookTransport(Transport):
    """POSTs ``{"text": ...}`` to a chat webhook (Slack-compatible)."""

    channel = "webhook"

    def __init__(self, timeout_ms: int = DEFAULT_WEBHOOK_TIMEOUT_MS) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    @staticmethod
    def build_payload(message: RenderedMessage) -> dict[str, str]:
        return {"text": message.text}

    async def send(self, destination: str | Sequence[str], message: RenderedMessage) -> DeliveryOutcome:
        if not isinstance(destination, str) or not destination.strip():
            return DeliveryOutcome.failed("webhook destination is empty")

        try:
            await self._post(destination, self.build_payload(message))
        except TransportError as exc:
            return DeliveryOutcome.failed(str(exc))
        return DeliveryOutcome.ok()

    async def _post(self, url: str, payload: dict[str, str]) -> None:
        try:
            session = self._get_session()
            async with session.post(url, json=payload, timeout=self._timeout) as resp:
                if resp.status >= 500:
                    body = await resp.text()
                    raise TransportError(f"HTTP {resp.status}: {body[:200]}")
                if resp.status >= 400:
                    # Only server errors count as failures.
                    logger.warning("webhook_client_error", status=resp.status)
        except asyncio.TimeoutError as exc:
            raise TransportError(f"timed out after {self._timeout.total * 1000:.0f}ms") from exc
        except (aiohttp.ClientError, OSError, ValueError) as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
