"""Tests for the semantic-layer prompts."""

from aigc_check.prompts import (
    ALTERNATIVES_PROMPT,
    ANALYSIS_PROMPT,
    COHERENCE_PROMPT,
    REWRITE_PROMPT,
    STYLE_PROMPT,
    SUGGESTIONS_PROMPT,
    build_alternatives_prompt,
    build_rewrite_prompt,
    build_suggestions_prompt,
    build_text_prompt,
)


def test_json_prompts_ask_for_json_only() -> None:
    for prompt in (
        ANALYSIS_PROMPT,
        COHERENCE_PROMPT,
        STYLE_PROMPT,
        SUGGESTIONS_PROMPT,
        REWRITE_PROMPT,
    ):
        assert "JSON" in prompt


def test_analysis_prompt_names_probability_field() -> None:
    assert "ai_probability" in ANALYSIS_PROMPT


def test_alternatives_prompt_is_plain_lines() -> None:
    assert "one per line" in ALTERNATIVES_PROMPT


def test_text_prompt_wraps_text() -> None:
    result = build_text_prompt("hello there")
    assert result.startswith("Text:")
    assert '"""\nhello there\n"""' in result


def test_suggestions_prompt_lists_issues() -> None:
    result = build_suggestions_prompt("body", ["too formal", "no voice"])
    assert "body" in result
    assert "- too formal\n- no voice" in result


def test_rewrite_prompt_carries_instructions() -> None:
    result = build_rewrite_prompt("body", "be casual")
    assert result.startswith("Instructions: be casual")
    assert "body" in result


def test_alternatives_prompt_quotes_phrase() -> None:
    result = build_alternatives_prompt("crucial", "a crucial step")
    assert '"crucial"' in result
    assert "a crucial step" in result
