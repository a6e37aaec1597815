"""Tests for macro extraction service."""

import asyncio

from macromate.services.extraction import IMAGE_FALLBACK_LABEL, MacroExtractionService
from tests.conftest import FakeCompletionClient


def test_calculate_from_text_normalizes_reply() -> None:
    client = FakeCompletionClient()
    service = MacroExtractionService(client)

    record = asyncio.run(service.calculate_from_text("100g chicken breast"))

    assert record.protein_g == 31.0
    assert record.calories == 165
    assert '"100g chicken breast"' in client.prompts[0]
    assert client.image_urls == [None]


def test_calculate_from_text_falls_back_on_client_error() -> None:
    client = FakeCompletionClient(error=RuntimeError("service down"))
    service = MacroExtractionService(client)

    record = asyncio.run(service.calculate_from_text("a mystery stew"))

    assert record.is_empty
    assert record.calories == 0
    assert record.parsed_food_item == "a mystery stew"


def test_calculate_from_text_falls_back_on_unparsable_reply() -> None:
    service = MacroExtractionService(FakeCompletionClient(reply="No idea, sorry."))

    record = asyncio.run(service.calculate_from_text("{weird} input"))

    assert record.is_empty
    assert record.parsed_food_item == "{weird} input"


def test_calculate_from_image_sends_data_url_and_weight() -> None:
    client = FakeCompletionClient()
    service = MacroExtractionService(client)

    record = asyncio.run(
        service.calculate_from_image(b"\x89PNGdata", "image/png", "250g")
    )

    assert record.fats_g == 3.6
    assert client.image_urls[0] is not None
    assert client.image_urls[0].startswith("data:image/png;base64,")
    assert 'weight: "250g"' in client.prompts[0]


def test_calculate_from_image_falls_back_with_generic_label() -> None:
    client = FakeCompletionClient(error=TimeoutError())
    service = MacroExtractionService(client)

    record = asyncio.run(service.calculate_from_image(b"\xff\xd8x", "image/jpeg", None))

    assert record.is_empty
    assert record.parsed_food_item == IMAGE_FALLBACK_LABEL


def test_self_test_uses_sample_description() -> None:
    client = FakeCompletionClient()
    service = MacroExtractionService(client)

    record = asyncio.run(service.self_test())

    assert record.protein_g == 31.0
    assert "grilled chicken breast" in client.prompts[0]
