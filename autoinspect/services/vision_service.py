"""Per-photo condition analysis using an OpenAI vision model."""
import base64
import json
import logging
import re
from typing import Protocol

from pydantic import ValidationError

from autoinspect.config import settings
from autoinspect.models.enums import FindingZone
from autoinspect.schemas.vision import AnalyzedFinding, PhotoAnalysis
from autoinspect.utils.exceptions import ProviderError

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = """\
You are a professional vehicle inspector working for a car dealership.

This photo shows the {zone} zone of a {vehicle}.

Evaluate the condition of what is visible and answer ONLY with a JSON object:
{{
  "score": <integer 1-10, 10 being perfect condition>,
  "findings": [
    {{
      "type": "scratch|dent|rust|paint_mismatch|wear|crack|stain|missing_part",
      "severity": "minor|moderate|major",
      "location": "where in the zone the finding is",
      "description": "short description of the finding",
      "confidence": <0.0-1.0>
    }}
  ]
}}

Rules:
- Do not invent damage you cannot clearly see
- If the zone looks perfect, return score 10 and an empty findings array
- 8-10: excellent / like new
- 6-7: good with minor cosmetic issues
- 4-5: fair with visible wear
- 1-3: poor with significant damage
"""


def _mask_secrets(message: str) -> str:
    return re.sub(r"sk-[A-Za-z0-9_-]+", "sk-***", message)


def _strip_code_fences(raw: str) -> str:
    text = raw.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = [l for l in lines if not l.strip().startswith("```")]
        text = "\n".join(lines)
    return text


def _build_api_kwargs(model: str, prompt: str, image_b64: str) -> dict:
    """Build OpenAI API kwargs based on model type."""
    api_kwargs: dict = {
        "model": model,
        "messages": [
            {"role": "system", "content": prompt},
            {
                "role": "user",
                "content": [
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:image/jpeg;base64,{image_b64}",
                            "detail": "auto",
                        },
                    },
                    {
                        "type": "text",
                        "text": "Analyze this vehicle photo and return your findings as JSON.",
                    },
                ],
            },
        ],
        "response_format": {"type": "json_object"},
    }

    if model.startswith("o"):
        # o-series reasoning models take no temperature and use
        # max_completion_tokens
        api_kwargs["max_completion_tokens"] = 4096
    else:
        api_kwargs["max_tokens"] = 1024
        api_kwargs["temperature"] = 0.1

    return api_kwargs


def parse_analysis(raw: str) -> PhotoAnalysis:
    """Parse the model's JSON answer.

    A bad score rejects the whole answer; individual malformed findings are
    dropped.
    """
    try:
        parsed = json.loads(_strip_code_fences(raw))
    except json.JSONDecodeError as e:
        raise ProviderError(f"Vision response is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ProviderError("Vision response is not a JSON object")

    findings = []
    for entry in parsed.get("findings") or []:
        try:
            findings.append(AnalyzedFinding.model_validate(entry))
        except ValidationError:
            logger.warning("Skipping invalid finding entry: %s", entry)

    try:
        return PhotoAnalysis(score=parsed.get("score"), findings=findings)
    except ValidationError as e:
        raise ProviderError(f"Vision response has an invalid score: {parsed.get('score')!r}") from e


class PhotoAnalyzer(Protocol):
    async def analyze(self, image: bytes, zone: FindingZone, vehicle_description: str) -> PhotoAnalysis:
        ...


class VisionAnalyzer:
    def __init__(self, api_key: str, model: str, base_url: str = ""):
        from openai import AsyncOpenAI

        kwargs = {"api_key": api_key}
        if base_url:
            kwargs["base_url"] = base_url
        self.client = AsyncOpenAI(**kwargs)
        self.model = model

    async def analyze(self, image: bytes, zone: FindingZone, vehicle_description: str) -> PhotoAnalysis:
        prompt = ANALYSIS_PROMPT.format(zone=zone.value, vehicle=vehicle_description)
        image_b64 = base64.b64encode(image).decode("utf-8")
        api_kwargs = _build_api_kwargs(self.model, prompt, image_b64)

        try:
            response = await self.client.chat.completions.create(**api_kwargs)
        except Exception as e:
            raise ProviderError(f"Vision API call failed: {_mask_secrets(str(e))}") from e

        if not response.choices:
            raise ProviderError("No response from vision API")

        raw_text = response.choices[0].message.content or ""
        logger.debug("Vision raw response (%d chars): %s", len(raw_text), raw_text[:500])
        return parse_analysis(raw_text)


def get_analyzer() -> VisionAnalyzer:
    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY not configured, cannot run inspections")
        raise ProviderError("Vision provider is not configured", status_code=503)
    return VisionAnalyzer(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
    )
