import logging
from typing import Any, Protocol

import httpx

from storefront.core.config import Settings

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def send(self, text: str) -> None: ...


class TelegramError(Exception):
    pass


class TelegramNotifier:
    """
    Pushes plain-text messages to one Telegram chat.
    Docs: POST /bot<token>/sendMessage
    """

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "TelegramNotifier":
        return cls(
            bot_token=settings.telegram_bot_token,
            chat_id=settings.telegram_chat_id,
            api_base=settings.telegram_api_base,
            timeout=settings.telegram_timeout,
        )

    @property
    def configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def send(self, text: str) -> None:
        if not self.configured:
            logger.info("Telegram is not configured; skipping notification")
            return

        url = f"{self.api_base}/bot{self.bot_token}/sendMessage"
        payload = {"chat_id": self.chat_id, "text": text}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(url, json=payload)

        body: dict[str, Any] = r.json() if r.content else {}
        if r.status_code != 200 or not body.get("ok", False):
            # the token is part of the URL, keep it out of the error
            raise TelegramError(f"sendMessage failed: status={r.status_code} description={body.get('description')}")


async def notify_safely(notifier: Notifier | None, text: str) -> None:
    """
    Best effort: scheduled as a background task after the response is
    decided, so nothing raised here may escape.
    """
    if notifier is None:
        return
    try:
        await notifier.send(text)
    except Exception:
        logger.exception("Failed to deliver Telegram notification")


# ---------------------------
# message formatting
# ---------------------------

def _line(label: str, value: Any) -> str:
    return f"{label}: {value if value not in (None, '') else '-'}"


def screenshot_url(base_url: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}/api/screenshot/{filename}"


def format_order_message(order: dict[str, Any], order_id: str, base_url: str) -> str:
    lines = [
        "🛒 طلب اشتراك جديد",
        _line("رقم الطلب", order_id),
        _line("الخدمة", order.get("subscriptionName")),
    ]
    if order.get("planKey"):
        lines += [
            _line("الباقة", order.get("planName")),
            _line("المدة", order.get("planDuration")),
            _line("السعر", order.get("planPrice")),
        ]
    else:
        lines += [
            _line("المدة", order.get("duration")),
            _line("السعر", order.get("subscriptionPrice")),
        ]
    lines += [
        _line("اسم الحساب", order.get("accountName")),
        _line("البريد الإلكتروني", order.get("email")),
        _line("رقم الهاتف", order.get("phone")),
        _line("رقم التحويل", order.get("transferNumber")),
    ]
    screenshot = order.get("transferScreenshot")
    lines.append(_line("صورة التحويل", screenshot_url(base_url, screenshot) if screenshot else "لم يتم الإرفاق"))
    lines.append(_line("التاريخ", order.get("createdAt")))
    return "\n".join(lines)


def format_suggestion_message(suggestion: dict[str, Any], suggestion_id: str) -> str:
    return "\n".join([
        "💡 اقتراح جديد",
        _line("رقم الاقتراح", suggestion_id),
        _line("الاسم", suggestion.get("name")),
        _line("وسيلة التواصل", suggestion.get("contact")),
        _line("الاقتراح", suggestion.get("message")),
        _line("التاريخ", suggestion.get("createdAt")),
    ])


def format_inquiry_message(inquiry: dict[str, Any], inquiry_id: str) -> str:
    return "\n".join([
        "❓ استفسار جديد",
        _line("رقم الاستفسار", inquiry_id),
        _line("الاسم", inquiry.get("name")),
        _line("البريد الإلكتروني", inquiry.get("email")),
        _line("الموضوع", inquiry.get("subject")),
        _line("الرسالة", inquiry.get("message")),
        _line("التاريخ", inquiry.get("createdAt")),
    ])
