"""Tests for AI meal analysis."""

import asyncio
import base64

import pytest

from nutriflow.domain.analysis import AIAnalysisResult
from nutriflow.domain.errors import MalformedResponse, MissingField, NoFoodRecognized
from nutriflow.domain.meals import validate_meal
from nutriflow.services.analysis import (
    SYSTEM_INSTRUCTION,
    AnalysisService,
    _to_data_url,
    extract_json,
    parse_analysis,
)
from tests.conftest import FakeAnalysisClient


def _service(client: FakeAnalysisClient) -> AnalysisService:
    return AnalysisService(
        client=client, model="gpt-5.2", reasoning_effort="low", store=False
    )


def test_extract_json_direct() -> None:
    assert extract_json('{"name": "Toast", "calories": 120}') == {
        "name": "Toast",
        "calories": 120,
    }


def test_extract_json_from_fenced_block() -> None:
    text = 'Here:\n```json\n{"name":"X","items":[],"calories":10}\n```'

    result = parse_analysis(text)

    assert result.name == "X"
    assert result.items == []
    assert result.calories == 10


def test_fenced_reply_parses_like_its_inner_json() -> None:
    inner = (
        '{"name":"X","items":[],"calories":1,"protein":1,"carbs":1,"fat":1,'
        '"portion":"p"}'
    )
    fenced = "Here you go:\n```json\n" + inner + "\n```"

    assert fenced == (
        "Here you go:\n```json\n"
        '{"name":"X","items":[],"calories":1,"protein":1,"carbs":1,"fat":1,'
        '"portion":"p"}\n```'
    )
    assert parse_analysis(fenced) == parse_analysis(inner)
    assert parse_analysis(fenced).portion == "p"


def test_extract_json_from_brace_span() -> None:
    text = 'Sure! {"name": "Rice", "calories": 200} Enjoy your meal.'

    assert extract_json(text)["name"] == "Rice"


def test_extract_json_rejects_non_json() -> None:
    with pytest.raises(MalformedResponse) as excinfo:
        extract_json("I could not do that")
    assert excinfo.value.raw_text == "I could not do that"


def test_extract_json_rejects_non_object() -> None:
    with pytest.raises(MalformedResponse):
        extract_json("[1, 2, 3]")


def test_parse_analysis_error_contract() -> None:
    with pytest.raises(NoFoodRecognized) as excinfo:
        parse_analysis('{"error":"no food"}')
    assert excinfo.value.message == "no food"


def test_parse_analysis_keeps_raw_values() -> None:
    result = parse_analysis('{"name": "Soup", "calories": "310", "fat": 9.5}')

    assert result.calories == "310"
    assert result.fat == 9.5
    fields = validate_meal(result.as_candidate())
    assert fields.calories == 310
    assert fields.fat == 10


def test_analyze_text_sends_description(analysis_client: FakeAnalysisClient) -> None:
    result = asyncio.run(_service(analysis_client).analyze_text("  chicken salad "))

    request = analysis_client.requests[0]
    assert request["text"] == "User description: chicken salad"
    assert request["instructions"] == SYSTEM_INSTRUCTION
    assert request["image_data_url"] is None
    assert request["store"] is False
    assert result.name == "Grilled chicken salad"
    assert result.portion == "1 bowl"


def test_analyze_text_requires_description(
    analysis_client: FakeAnalysisClient,
) -> None:
    with pytest.raises(MissingField):
        asyncio.run(_service(analysis_client).analyze_text("   "))
    assert analysis_client.requests == []


def test_analyze_image_sends_data_url(analysis_client: FakeAnalysisClient) -> None:
    png = b"\x89PNG\r\n\x1a\nrest"

    asyncio.run(_service(analysis_client).analyze_image(png))

    request = analysis_client.requests[0]
    assert request["text"] is None
    expected = base64.b64encode(png).decode()
    assert request["image_data_url"] == f"data:image/png;base64,{expected}"


def test_analyze_image_requires_bytes(analysis_client: FakeAnalysisClient) -> None:
    with pytest.raises(MissingField):
        asyncio.run(_service(analysis_client).analyze_image(b""))


def test_data_url_defaults_to_jpeg() -> None:
    assert _to_data_url(b"abc").startswith("data:image/jpeg;base64,")
    assert _to_data_url(b"abc", "image/webp").startswith("data:image/webp;base64,")


def test_recalculate_keeps_name_and_items() -> None:
    client = FakeAnalysisClient(
        replies=[
            '```json\n{"name": "Something else", "items": ["x"], "calories": 610,'
            ' "protein": 40, "carbs": 55, "fat": 21, "portion": "1 plate"}\n```'
        ]
    )
    draft = AIAnalysisResult(
        name="Chicken bowl",
        items=["chicken"],
        calories=400,
        protein=30,
        carbs=20,
        fat=10,
        portion="1 bowl",
    )

    updated = asyncio.run(
        _service(client).recalculate(draft, ["chicken", " ", "rice "])
    )

    assert client.requests[0]["text"] == "User description: chicken, rice"
    assert updated.name == "Chicken bowl"
    assert updated.items == ["chicken", "rice"]
    assert updated.calories == 610
    assert updated.portion == "1 plate"


def test_recalculate_requires_items(analysis_client: FakeAnalysisClient) -> None:
    draft = AIAnalysisResult(name="Bowl")
    with pytest.raises(MissingField):
        asyncio.run(_service(analysis_client).recalculate(draft, ["", "  "]))
