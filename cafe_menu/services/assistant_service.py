"""
Menu assistant.

Serializes the available menu into a Persian text context and asks the
Gemini text-generation API one question with it. One call per question,
bounded by a timeout, no retries.
"""

import logging
from typing import List, Optional

import requests

from ..config.settings import Settings
from ..core.exceptions import ServiceUnavailableError, ValidationError
from ..models.menu import MenuCategory
from .catalog_service import CatalogService

logger = logging.getLogger(__name__)

_PERSIAN_DIGITS = str.maketrans("0123456789,", "۰۱۲۳۴۵۶۷۸۹٬")

SYSTEM_PROMPT = (
    "تو نقش باریستای یک کافه ایرانی به نام «{cafe_name}» را داری. "
    "بر اساس منوی زیر، به پرسش یا درخواست مشتری جواب بده. "
    "پیشنهادت را با لحن دوستانه فارسی بده و حتماً نام نوشیدنی‌های پیشنهادی را ذکر کن. "
    "اگر لازم بود توضیح بده چرا فکر می‌کنی آن نوشیدنی مناسب است. "
    "فقط از اطلاعات منوی زیر استفاده کن و اگر چیزی در منو نیست واضح بگو موجود نیست."
    "\n\nمنو:\n{menu}"
)


def format_price(amount: int) -> str:
    """Price with Persian digits and thousands separators, e.g. ۵۰٬۰۰۰"""
    return f"{amount:,}".translate(_PERSIAN_DIGITS)


def build_menu_context(categories: List[MenuCategory]) -> str:
    """Deterministic text rendering of the categories that have items"""
    blocks = []
    for category in categories:
        if not category.items:
            continue

        lines = [f"دسته {category.name}" + (f": {category.description}" if category.description else "")]
        for item in category.items:
            line = f"- {item.persian_name}"
            if item.english_name:
                line += f" ({item.english_name})"
            if item.options:
                prices = [f"{option.label}: {format_price(option.price)} ریال" for option in item.options]
                line += " | " + " / ".join(prices)
            if item.description:
                line += f"\n  توضیحات: {item.description}"
            lines.append(line)
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)


class GeminiClient:
    """Minimal client for the Gemini generateContent endpoint"""

    def __init__(self, api_key: str, model: str, base_url: str, timeout: float):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def generate(self, parts: List[str]) -> str:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": text} for text in parts]}]}
        try:
            response = requests.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Gemini request failed: %s", e)
            raise ServiceUnavailableError("پاسخ هوش مصنوعی قابل دریافت نیست.") from e

        texts = [
            part.get("text", "")
            for candidate in data.get("candidates") or []
            for part in (candidate.get("content") or {}).get("parts") or []
        ]
        reply = "".join(texts)
        if not reply:
            logger.error("Gemini returned no text: %s", data.get("promptFeedback"))
            raise ServiceUnavailableError("پاسخ هوش مصنوعی قابل دریافت نیست.")
        return reply


class AssistantService:
    """Answers customer questions from the available menu"""

    def __init__(self, catalog: CatalogService, settings: Settings,
                 client: Optional[GeminiClient] = None):
        self.catalog = catalog
        self.settings = settings
        self._client = client

    def _get_client(self) -> GeminiClient:
        if self._client is not None:
            return self._client
        if not self.settings.gemini_api_key:
            raise ServiceUnavailableError("کلید Gemini تنظیم نشده است.")
        return GeminiClient(
            api_key=self.settings.gemini_api_key,
            model=self.settings.gemini_model,
            base_url=self.settings.gemini_api_base,
            timeout=self.settings.assistant_timeout_seconds,
        )

    def answer(self, question: Optional[str]) -> str:
        message = (question or "").strip()
        if not message:
            raise ValidationError("پیام کاربر خالی است.")

        client = self._get_client()

        categories = self.catalog.list_menu(include_unavailable=False)
        context = build_menu_context(categories)
        if not context:
            raise ServiceUnavailableError("منو خالی است.")

        prompt = SYSTEM_PROMPT.format(cafe_name=self.settings.cafe_name, menu=context)
        return client.generate([prompt, f"مشتری گفت: {message}"])
