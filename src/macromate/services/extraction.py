"""Macro extraction service using a hosted generative model."""

import logging
from dataclasses import dataclass
from typing import Protocol

from macromate.domain.macros import MacroRecord
from macromate.services.images import to_data_url
from macromate.services.normalizer import normalize

IMAGE_FALLBACK_LABEL = "Unknown food item"

SELF_TEST_DESCRIPTION = "100g grilled chicken breast with 150g steamed broccoli"

_REPLY_FORMAT = """Required JSON format (respond with this format only):
{
  "protein_g": <number>,
  "carbs_g": <number>,
  "fats_g": <number>,
  "calories": <number>,
  "parsed_food_item": "<string describing the food as you understood it>"
}"""

_SOURCING_RULES = (
    "All food is from the UK. When a brand is mentioned, use its published "
    "nutritional information if you know it. If exact information is not "
    "available, use reasonable estimates based on common nutritional values, "
    "and use the lower bound of protein content so you do not overshoot "
    "protein values."
)

TEXT_PROMPT_TEMPLATE = """You are a nutrition expert. Analyze the following food description and calculate the approximate macronutrients.

IMPORTANT: Respond ONLY with a valid JSON object in the exact format specified below. Do not include any additional text, markdown formatting, or explanations.
{sourcing_rules}
Food description: "{description}"

Analyze this food description and provide the macronutrient breakdown. If quantities are not specified, assume reasonable serving sizes. If you cannot identify the food or calculate macros, return zeros.

{reply_format}

Examples:
Input: "1 slice whole wheat bread, 20g peanut butter"
Output: {{"protein_g": 10.5, "carbs_g": 25.1, "fats_g": 18.2, "calories": 290, "parsed_food_item": "1 slice whole wheat bread, 20g peanut butter"}}

Input: "100g chicken breast"
Output: {{"protein_g": 31.0, "carbs_g": 0.0, "fats_g": 3.6, "calories": 165, "parsed_food_item": "100g chicken breast"}}

Now analyze: "{description}\""""

IMAGE_PROMPT_TEMPLATE = """You are a nutrition expert. Analyze the attached image of a food nutrition label and calculate the macronutrients for the weight specified below.

IMPORTANT: Respond ONLY with a valid JSON object in the exact format specified below. Do not include any additional text, markdown formatting, or explanations.

Weight: "{weight}"

Analyze this nutrition label and the weight provided and provide the macronutrient breakdown. If quantities are not specified, assume reasonable serving sizes. If you cannot identify the food or calculate macros, return zeros.
{sourcing_rules}

{reply_format}

Examples:
Input: "An image of a frozen pizza nutrition label stating that 100g has 20g protein, 30g carbs, 10g fats, 500kcal and the weight provided is 50g"
Output: {{"protein_g": 10, "carbs_g": 15, "fats_g": 5, "calories": 250, "parsed_food_item": "A frozen pizza"}}

Now analyze the image with weight: "{weight}\""""

_logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Interface for generative text/vision completions."""

    async def complete(self, prompt: str, image_data_url: str | None = None) -> str:
        """Return the raw model reply for a prompt."""


@dataclass
class MacroExtractionService:
    """Builds extraction prompts and normalizes the model's replies."""

    client: CompletionClient

    async def extract_from_text(self, description: str) -> str:
        """Ask the model for macros of a free-text food description."""
        prompt = TEXT_PROMPT_TEMPLATE.format(
            description=description,
            sourcing_rules=_SOURCING_RULES,
            reply_format=_REPLY_FORMAT,
        )
        return await self.client.complete(prompt)

    async def extract_from_image(
        self, image_bytes: bytes, mime_type: str, weight_hint: str | None
    ) -> str:
        """Ask the model for macros of a nutrition-label photo."""
        prompt = IMAGE_PROMPT_TEMPLATE.format(
            weight=weight_hint or "",
            sourcing_rules=_SOURCING_RULES,
            reply_format=_REPLY_FORMAT,
        )
        return await self.client.complete(
            prompt, image_data_url=to_data_url(image_bytes, mime_type)
        )

    async def calculate_from_text(self, description: str) -> MacroRecord:
        """Return macros for a description, or the zero record on failure."""
        try:
            raw_text = await self.extract_from_text(description)
        except Exception:
            _logger.exception("Text macro extraction failed")
            return MacroRecord.empty(description)
        return normalize(raw_text, description)

    async def calculate_from_image(
        self, image_bytes: bytes, mime_type: str, weight_hint: str | None
    ) -> MacroRecord:
        """Return macros for a label photo, or the zero record on failure."""
        try:
            raw_text = await self.extract_from_image(
                image_bytes, mime_type, weight_hint
            )
        except Exception:
            _logger.exception(
                "Image macro extraction failed",
                extra={"mime_type": mime_type, "size": len(image_bytes)},
            )
            return MacroRecord.empty(IMAGE_FALLBACK_LABEL)
        return normalize(raw_text, IMAGE_FALLBACK_LABEL)

    async def self_test(self) -> MacroRecord:
        """Run a fixed sample description through the extraction pipeline."""
        return await self.calculate_from_text(SELF_TEST_DESCRIPTION)
