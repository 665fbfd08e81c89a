"""Tests for JSON-or-fallback decoding of model replies."""

from __future__ import annotations

from services.vision.reply_decoder import (
    FALLBACK_BRAND,
    Fallback,
    Structured,
    candidates_of,
    decode_reply,
    strip_code_fence,
)


def test_strip_code_fence_with_language_tag() -> None:
    assert strip_code_fence('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'


def test_strip_code_fence_without_language_tag() -> None:
    assert strip_code_fence('```\n{"a": 1}\n```\n') == '{"a": 1}'


def test_strip_code_fence_leaves_plain_text_alone() -> None:
    assert strip_code_fence("  plain reply \n") == "plain reply"


def test_single_object_becomes_one_candidate() -> None:
    result = decode_reply('{"brand": "Sony", "costToReplace": 199}')
    assert isinstance(result, Structured)
    assert result.candidates == [{"brand": "Sony", "costToReplace": 199}]


def test_list_of_n_yields_n_candidates_in_order() -> None:
    result = decode_reply('[{"brand": "a"}, {"brand": "b"}, {"brand": "c"}]')
    assert isinstance(result, Structured)
    assert [c["brand"] for c in candidates_of(result)] == ["a", "b", "c"]


def test_empty_list_is_valid() -> None:
    result = decode_reply("[]")
    assert isinstance(result, Structured)
    assert candidates_of(result) == []


def test_fenced_list_is_parsed() -> None:
    result = decode_reply('```json\n[{"brandOrManufacturer":"Acme","costToReplace":"12.50"}]\n```')
    assert isinstance(result, Structured)
    assert len(result.candidates) == 1


def test_prose_reply_falls_back_to_single_item() -> None:
    result = decode_reply("I see a lamp and a chair", "photo.jpg")
    assert isinstance(result, Fallback)
    item = result.candidate
    assert item["brandOrManufacturer"] == FALLBACK_BRAND
    assert item["description"] == "I see a lamp and a chair"
    assert item["itemDescription"] == "Items visible in photo.jpg"
    assert item["costToReplace"] == 25.99
    assert item["totalCost"] == 25.99


def test_fallback_description_is_truncated_prefix() -> None:
    raw = "The photo shows " + "x" * 500
    result = decode_reply(raw)
    candidates = candidates_of(result)
    assert len(candidates) == 1
    description = candidates[0]["description"]
    assert len(description) == 200
    assert raw.startswith(description)


def test_empty_reply_falls_back() -> None:
    result = decode_reply("")
    assert isinstance(result, Fallback)
    assert result.candidate["description"] == ""


def test_truncated_json_falls_back() -> None:
    result = decode_reply('[{"brand": "Acme", "costToReplace": ')
    assert isinstance(result, Fallback)
