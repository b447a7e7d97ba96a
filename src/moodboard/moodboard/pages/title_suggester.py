from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

import requests

from ..blocks.factory import BlockKindFactory
from ..common.datetime_utils import today_local
from ..core.constants import TITLE_CONTEXT_BLOCKS, TITLE_MAX_LENGTH
from ..core.enums import TitleSource
from .model import Block

logger = logging.getLogger(__name__)

PERPLEXITY_URL = "https://api.perplexity.ai/chat/completions"
PERPLEXITY_MODEL = "llama-3.1-sonar-small-128k-online"

SYSTEM_PROMPT = (
    "You are a creative naming assistant. Generate short, evocative titles for moodboards "
    "and creative projects. Respond with only the title, no quotes or extra text."
)


@dataclass(frozen=True)
class TitleSuggestion:
    title: str
    source: TitleSource


def _shorten(text: str, limit: int = 30) -> str:
    return text[: limit - 3] + "..." if len(text) > limit else text


def default_title(today: date) -> str:
    return f"Mood Board {today.strftime('%m/%d/%Y')}"


class TitleSuggester:
    """Suggests a short page title from the text on a mood board.

    An AI completion is used when an API key is configured; otherwise, or when
    the call fails, a heuristic over headings, sticky notes and text is used.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        kinds: Optional[BlockKindFactory] = None,
        session: Optional[requests.Session] = None,
        today: Callable[[], date] = today_local,
    ):
        self._api_key = api_key
        self._timeout = timeout
        self._kinds = kinds or BlockKindFactory()
        self._session = session or requests.Session()
        self._today = today

    def collect_text(self, blocks: Sequence[Block]) -> list[str]:
        lines: list[str] = []
        for block in blocks:
            kind = self._kinds.for_type(block.type)
            if not kind.text_like:
                continue
            text = kind.render(block.content).strip()
            if text:
                lines.append(f"[{block.type}]: {text}")
        return lines

    def suggest(self, blocks: Sequence[Block]) -> TitleSuggestion:
        try:
            lines = self.collect_text(blocks)
            if not lines:
                return TitleSuggestion(default_title(self._today()), TitleSource.FALLBACK)

            if self._api_key:
                title = self._ask_ai("\n".join(lines[:TITLE_CONTEXT_BLOCKS]))
                if title:
                    return TitleSuggestion(title, TitleSource.AI)

            return TitleSuggestion(self.heuristic_title(blocks), TitleSource.HEURISTIC)
        except Exception:
            logger.exception("title suggestion failed")
            return TitleSuggestion(default_title(self._today()), TitleSource.ERROR)

    def heuristic_title(self, blocks: Sequence[Block]) -> str:
        def first_text(block_type: str, min_length: int = 1) -> Optional[str]:
            for block in blocks:
                if block.type != block_type:
                    continue
                text = self._kinds.for_type(block_type).render(block.content)
                if len(text) >= min_length:
                    return text
            return None

        heading = first_text("heading1")
        if heading:
            return heading[:40]

        sticky = first_text("sticky_note")
        if sticky:
            return _shorten(sticky)

        text = first_text("text", min_length=6)
        if text:
            return _shorten(text)

        return default_title(self._today())

    def _ask_ai(self, content_summary: str) -> Optional[str]:
        prompt = (
            "Analyze this moodboard content and generate a SHORT, creative title (2-5 words max).\n"
            "The title should capture the main theme or mood. Be creative but concise.\n\n"
            f"Content:\n{content_summary}\n\n"
            "Respond with ONLY the title, nothing else."
        )
        try:
            response = self._session.post(
                PERPLEXITY_URL,
                headers={"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"},
                json={
                    "model": PERPLEXITY_MODEL,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    "max_tokens": 30,
                    "temperature": 0.7,
                },
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("title AI request failed: %s", e)
            return None

        if not response.ok:
            logger.warning("title AI returned HTTP %s", response.status_code)
            return None

        try:
            data = response.json()
            raw = data["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError):
            return None
        return clean_ai_title(raw)


def clean_ai_title(raw: str) -> str:
    title = raw.strip().split("\n")[0].strip()
    if title[:1] in {'"', "'"}:
        title = title[1:]
    if title[-1:] in {'"', "'"}:
        title = title[:-1]
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        title = title[: TITLE_MAX_LENGTH - 3] + "..."
    return title
