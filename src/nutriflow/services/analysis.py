"""AI-assisted meal analysis from text descriptions and photos."""

import base64
import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from nutriflow.domain.analysis import AIAnalysisResult
from nutriflow.domain.errors import MalformedResponse, MissingField, NoFoodRecognized

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """\
You are NutriAI, an expert nutritionist and calorie estimator.
Analyze the provided image (or text description) of a meal.
Identify the food items, estimate the portion sizes, and calculate the \
approximate nutritional values.

CRITICAL INSTRUCTION: You MUST return ONLY a valid JSON object. Do not wrap \
the JSON in markdown code fences. Do not add any text before or after the JSON.

The JSON object MUST follow exactly this structure:
{
  "name": "A short, descriptive name of the dish",
  "items": ["list", "of", "ingredients", "identified"],
  "calories": 450,
  "protein": 35,
  "carbs": 40,
  "fat": 15,
  "portion": "e.g. '1 medium plate' or '~350g'"
}

If you cannot identify any food in the image, or the text is not related to \
food, return exactly this JSON:
{
  "error": "Could not identify food in this image or text."
}
"""

_FENCED_BLOCK = re.compile(
    r"```(?:json)?[ \t]*\r?\n?(.*?)\r?\n?[ \t]*```", re.DOTALL | re.IGNORECASE
)


class AnalysisClient(Protocol):
    """Interface for a generative model that returns raw text."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        text: str | None,
        image_data_url: str | None,
    ) -> str:
        """Send one request and return the model's text output."""


@dataclass
class AnalysisService:
    """Service that asks the model for a meal estimate and parses the reply."""

    client: AnalysisClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze_text(self, description: str) -> AIAnalysisResult:
        """Estimate a meal from a free-text description."""
        if not description or not description.strip():
            raise MissingField("description")
        raw = await self.client.complete(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            instructions=SYSTEM_INSTRUCTION,
            text=f"User description: {description.strip()}",
            image_data_url=None,
        )
        return parse_analysis(raw)

    async def analyze_image(
        self, image_bytes: bytes, mime_type: str | None = None
    ) -> AIAnalysisResult:
        """Estimate a meal from a photo.

        The image is expected to be compressed by the caller already.
        """
        if not image_bytes:
            raise MissingField("image")
        raw = await self.client.complete(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            instructions=SYSTEM_INSTRUCTION,
            text=None,
            image_data_url=_to_data_url(image_bytes, mime_type),
        )
        return parse_analysis(raw)

    async def recalculate(
        self, result: AIAnalysisResult, items: Sequence[str]
    ) -> AIAnalysisResult:
        """Re-estimate macros for an edited ingredient list."""
        valid_items = [item.strip() for item in items if item and item.strip()]
        if not valid_items:
            raise MissingField("items")
        updated = await self.analyze_text(", ".join(valid_items))
        return AIAnalysisResult(
            name=result.name,
            items=list(valid_items),
        ).with_macros(updated)


def parse_analysis(text: str) -> AIAnalysisResult:
    """Parse a model reply into a draft, enforcing the error contract."""
    payload = extract_json(text)
    if "error" in payload:
        message = str(payload["error"])
        logger.info("Model reported no recognizable food: %s", message)
        raise NoFoodRecognized(message)
    return AIAnalysisResult.from_payload(payload)


def extract_json(text: str) -> dict[str, object]:
    """Extract a JSON object from model output.

    Tries a direct parse, then the contents of a fenced code block, then the
    span between the first ``{`` and the last ``}``.
    """
    parsed = _try_parse(text)
    if parsed is not None:
        return parsed

    match = _FENCED_BLOCK.search(text)
    if match:
        parsed = _try_parse(match.group(1))
        if parsed is not None:
            logger.debug("Parsed model output from a fenced block")
            return parsed

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        parsed = _try_parse(text[start : end + 1])
        if parsed is not None:
            logger.debug("Parsed model output from a brace-delimited span")
            return parsed

    logger.warning("Model output did not contain a JSON object")
    raise MalformedResponse(text)


def _try_parse(text: str) -> dict[str, object] | None:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    resolved = mime_type or _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{resolved};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
