"""
AI gateway client.

Talks to an OpenAI-compatible chat-completions endpoint to
- draw a word as an SVG sketch (``generate_drawing``),
- guess a word from a drawn image (``guess_from_image``).

Both calls raise AIServiceError on any failure. Retrying is the caller's
job (see ``scribble.ai.retry.with_retry``).
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

import requests

from ..exceptions import AIServiceError
from .prompts import DRAWING_PROMPT, GUESSING_PROMPT
from .sketches import MOCK_DRAWINGS
from .svg import extract_svg, svg_data_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: Tuple[float, float] = (5.0, 45.0)  # connect, read

_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()\"'?]")


@dataclass
class Drawing:
    svg: str
    image: str
    raw_text: str


def normalize_guess(raw: str) -> str:
    guess = _PUNCTUATION_RE.sub("", (raw or "").lower()).strip()
    return guess or "unknown"


def mock_drawing(word: str) -> Drawing:
    svg = MOCK_DRAWINGS.get(word.lower()) or MOCK_DRAWINGS["cat"]
    return Drawing(svg=svg, image=svg_data_url(svg), raw_text=svg)


class GatewayClient:
    def __init__(
        self,
        endpoint: str,
        token: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
    ) -> None:
        self.endpoint = endpoint
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "GatewayClient":
        return cls(
            config.AI_GATEWAY_URL,
            config.AI_GATEWAY_TOKEN,
            timeout=(5.0, float(config.AI_TIMEOUT_SEC)),
        )

    def chat(self, model_id: str, messages: List[Dict[str, Any]], temperature: float = 0.7) -> str:
        if not self.token:
            raise AIServiceError("AI gateway token is not configured")

        request_id = uuid4().hex[:8]
        payload = {"model": model_id, "messages": messages, "temperature": temperature}
        headers = {"Authorization": f"Bearer {self.token}"}

        try:
            logger.debug("[ai-request] id=%s model=%s", request_id, model_id)
            response = self.session.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.Timeout as exc:
            logger.warning("[ai-timeout] id=%s model=%s", request_id, model_id)
            raise AIServiceError("AI gateway request timed out") from exc
        except requests.RequestException as exc:
            logger.error("[ai-error] id=%s model=%s: %s", request_id, model_id, exc)
            raise AIServiceError(f"AI gateway request failed: {exc}") from exc
        except ValueError as exc:
            raise AIServiceError("Invalid JSON payload from AI gateway") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AIServiceError("Invalid response structure from AI gateway") from exc
        if not content:
            raise AIServiceError("Empty response from AI gateway")
        return content

    def generate_drawing(self, model_id: str, word: str) -> Drawing:
        messages = [{"role": "user", "content": DRAWING_PROMPT.format(word=word)}]
        raw_text = self.chat(model_id, messages, temperature=0)

        svg = extract_svg(raw_text)
        if not svg:
            raise AIServiceError("No SVG found in AI response")
        return Drawing(svg=svg, image=svg_data_url(svg), raw_text=raw_text)

    def guess_from_image(self, model_id: str, image: str) -> str:
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": GUESSING_PROMPT},
                    {"type": "image_url", "image_url": {"url": image}},
                ],
            }
        ]
        return normalize_guess(self.chat(model_id, messages, temperature=0))
