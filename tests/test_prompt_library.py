# /tests/test_prompt_library.py

import json

import pytest

from app.models.content_model import ContentLength, ContentMode, ContentStyle, GenerationRequest
from app.services import prompt_library
from app.services.prompt_library import LENGTH_RULES, build_prompt, resolve_length_rule


def _rules_in(prompt: str):
    return [length for length, rule in LENGTH_RULES.items() if rule in prompt]


@pytest.mark.parametrize("length", list(ContentLength))
def test_user_prompt_embeds_topic_once_and_one_length_rule(length):
    topic = "Solo traveling to Kyoto on a shoestring"
    request = GenerationRequest(topic=topic, mode=ContentMode.TRAVEL, style=ContentStyle.CINEMATIC, length=length)

    _, user_prompt = build_prompt(request)

    assert user_prompt.count(topic) == 1
    assert _rules_in(user_prompt) == [length]
    assert "travel" in user_prompt
    assert "cinematic" in user_prompt


def test_missing_or_unknown_length_falls_back_to_medium():
    for length in [None, "epic", ""]:
        request = GenerationRequest.model_construct(
            topic="New phone launch", mode=ContentMode.GENERAL, style=ContentStyle.GENERAL, length=length
        )
        _, user_prompt = build_prompt(request)
        assert _rules_in(user_prompt) == [ContentLength.MEDIUM]

    assert resolve_length_rule("long") == LENGTH_RULES[ContentLength.LONG]


def test_system_prompt_declares_response_schema():
    system_prompt, _ = build_prompt(GenerationRequest(topic="anything"))
    document = json.loads(system_prompt)

    schema = document["response_structure"]
    assert set(schema) == {
        "content", "captions", "hashtags", "cta", "alt_version",
        "keywords", "visual_guide", "tone_used",
    }
    assert len(schema["captions"]) == 3
    assert "Return ONLY JSON" in document["output_instruction"]
    assert system_prompt == prompt_library.SYSTEM_PROMPT


def test_topic_with_braces_is_not_treated_as_template():
    topic = "Why {everyone} loves {{curly}} braces"
    _, user_prompt = build_prompt(GenerationRequest(topic=topic))
    assert user_prompt.count(topic) == 1


def test_blank_topic_is_rejected():
    with pytest.raises(ValueError):
        GenerationRequest(topic="   ")
