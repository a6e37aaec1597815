"""Normalization of free-text model replies into macro records."""

import json
import logging
import re

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from macromate.domain.macros import MacroRecord

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

_logger = logging.getLogger(__name__)


class MacroReply(BaseModel):
    """Shape of the JSON object the model is asked to return."""

    model_config = ConfigDict(strict=True, allow_inf_nan=False, extra="ignore")

    protein_g: float
    carbs_g: float
    fats_g: float
    calories: float
    parsed_food_item: str


class NormalizationError(ValueError):
    """Raised internally when a reply cannot be turned into a record."""


def normalize(raw_text: str | None, fallback_label: str) -> MacroRecord:
    """Parse a model reply into a MacroRecord, falling back to zeros.

    The first ``{`` through the last ``}`` is parsed as JSON and validated.
    Protein, carbs and fats are clamped to zero or above; calories are passed
    through as parsed. Any failure yields an all-zero record labelled with
    ``fallback_label``. This function never raises.
    """
    try:
        reply = _parse_reply(raw_text or "")
    except NormalizationError as exc:
        _logger.warning(
            "Failed to parse model reply: %s",
            exc,
            extra={"raw_text": raw_text},
        )
        return MacroRecord.empty(fallback_label)

    return MacroRecord(
        protein_g=max(0.0, reply.protein_g),
        carbs_g=max(0.0, reply.carbs_g),
        fats_g=max(0.0, reply.fats_g),
        calories=reply.calories,
        parsed_food_item=reply.parsed_food_item,
    )


def _parse_reply(raw_text: str) -> MacroReply:
    match = _JSON_OBJECT.search(raw_text)
    if match is None:
        raise NormalizationError("No JSON object found in response")
    try:
        payload = json.loads(match.group(0))
    except (ValueError, RecursionError) as exc:
        raise NormalizationError(f"Malformed JSON: {exc}") from exc
    try:
        return MacroReply.model_validate(payload)
    except PydanticValidationError as exc:
        raise NormalizationError("Invalid JSON structure") from exc
