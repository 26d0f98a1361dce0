"""Tests for semantic analysis, suggestions and response parsing."""

from __future__ import annotations

import json

import pytest

from aigc_check.semantic.analyzer import UNPARSABLE, SemanticAnalyzer
from aigc_check.semantic.client import Completion
from aigc_check.semantic.parsing import (
    parse_json_array_response,
    parse_json_response,
    strip_code_fence,
)
from aigc_check.semantic.suggester import Suggester, fallback_suggestions


class _ScriptedClient:
    """Stands in for SemanticClient, replaying canned completions."""

    def __init__(self, *contents: str, from_cache: bool = False) -> None:
        self._contents = list(contents)
        self._from_cache = from_cache
        self.calls: list[tuple[str, str, bool]] = []

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        json_mode: bool = True,
    ) -> Completion:
        self.calls.append((system_prompt, user_prompt, json_mode))
        return Completion(
            content=self._contents.pop(0),
            model="fake",
            from_cache=self._from_cache,
        )


class _FailingClient:
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        json_mode: bool = True,
    ) -> Completion:
        raise ConnectionError("provider down")


class TestParsing:
    def test_plain_object(self) -> None:
        assert parse_json_response('{"a": 1}') == {"a": 1}

    def test_fenced_object(self) -> None:
        response = '```json\n{"a": 1}\n```'
        assert parse_json_response(response) == {"a": 1}

    def test_object_inside_prose(self) -> None:
        response = 'Here you go: {"a": {"b": 2}} hope that helps'
        assert parse_json_response(response) == {"a": {"b": 2}}

    def test_array_when_object_expected(self) -> None:
        with pytest.raises(ValueError):
            parse_json_response("[1, 2]")

    def test_garbage_raises_decode_error(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            parse_json_response("not json at all")

    def test_array(self) -> None:
        assert parse_json_array_response('x [{"a": 1}] y') == [{"a": 1}]

    def test_strip_code_fence_without_fence(self) -> None:
        assert strip_code_fence("  {}  ") == "{}"


class TestSemanticAnalyzer:
    async def test_analyze_text(self) -> None:
        payload = {
            "ai_probability": 85,
            "confidence": 0.9,
            "features": [
                {"name": "template", "description": "d", "severity": "high"}
            ],
            "explanation": "Formulaic",
            "suggestions": ["Vary openers"],
        }
        client = _ScriptedClient(json.dumps(payload))
        result = await SemanticAnalyzer(client).analyze_text("text")  # type: ignore[arg-type]
        assert result.ai_probability == 85
        assert result.features[0].name == "template"
        assert result.explanation == "Formulaic"
        assert not result.from_cache

    async def test_unparsable_response_is_neutral(self) -> None:
        client = _ScriptedClient("I cannot answer that")
        result = await SemanticAnalyzer(client).analyze_text("text")  # type: ignore[arg-type]
        assert result.ai_probability == 50.0
        assert result.confidence == pytest.approx(0.3)
        assert result.explanation == UNPARSABLE

    async def test_out_of_range_probability_is_neutral(self) -> None:
        client = _ScriptedClient('{"ai_probability": 250}')
        result = await SemanticAnalyzer(client).analyze_text("text")  # type: ignore[arg-type]
        assert result.ai_probability == 50.0

    async def test_cache_flag_propagates(self) -> None:
        client = _ScriptedClient('{"ai_probability": 10}', from_cache=True)
        result = await SemanticAnalyzer(client).analyze_text("text")  # type: ignore[arg-type]
        assert result.from_cache

    async def test_transport_error_propagates(self) -> None:
        analyzer = SemanticAnalyzer(_FailingClient())  # type: ignore[arg-type]
        with pytest.raises(ConnectionError):
            await analyzer.analyze_text("text")

    async def test_coherence(self) -> None:
        client = _ScriptedClient(
            '{"score": 64, "issues": [{"type": "jump"}], "assessment": "ok"}'
        )
        result = await SemanticAnalyzer(client).analyze_coherence("t")  # type: ignore[arg-type]
        assert result.score == 64
        assert result.issues[0].type == "jump"

    async def test_coherence_default(self) -> None:
        client = _ScriptedClient("nope")
        result = await SemanticAnalyzer(client).analyze_coherence("t")  # type: ignore[arg-type]
        assert result.score == 70.0
        assert result.assessment == UNPARSABLE

    async def test_style(self) -> None:
        client = _ScriptedClient(
            '{"personalization_score": 30, "missing_features": ["humor"]}'
        )
        result = await SemanticAnalyzer(client).analyze_style("t")  # type: ignore[arg-type]
        assert result.personalization_score == 30
        assert result.missing_features == ["humor"]

    async def test_style_default(self) -> None:
        client = _ScriptedClient("")
        result = await SemanticAnalyzer(client).analyze_style("t")  # type: ignore[arg-type]
        assert result.personalization_score == 50.0


class TestSuggester:
    async def test_no_issues_no_call(self) -> None:
        client = _ScriptedClient()
        assert await Suggester(client).generate_suggestions("t", []) == []  # type: ignore[arg-type]
        assert client.calls == []

    async def test_generate_suggestions(self) -> None:
        client = _ScriptedClient(
            json.dumps([
                {"type": "vocabulary", "priority": 1, "title": "Swap words"},
                "not an object",
                {"priority": "urgent"},
            ])
        )
        result = await Suggester(client).generate_suggestions(  # type: ignore[arg-type]
            "t", ["overused words"]
        )
        assert len(result) == 1
        assert result[0].title == "Swap words"
        assert "overused words" in client.calls[0][1]

    async def test_unparsable_falls_back(self) -> None:
        client = _ScriptedClient("sorry")
        result = await Suggester(client).generate_suggestions(  # type: ignore[arg-type]
            "t", ["a", "b"]
        )
        assert [s.description for s in result] == ["a", "b"]
        assert [s.priority for s in result] == [1, 2]

    def test_fallback_capped_at_five(self) -> None:
        result = fallback_suggestions([f"issue {i}" for i in range(8)])
        assert len(result) == 5
        assert all(s.type == "general" for s in result)

    async def test_rewrite(self) -> None:
        client = _ScriptedClient(
            '{"rewritten_text": "better", "changes": '
            '[{"original": "a", "modified": "b", "reason": "c"}]}'
        )
        result = await Suggester(client).rewrite_text("worse")  # type: ignore[arg-type]
        assert result.rewritten_text == "better"
        assert result.changes[0].modified == "b"

    async def test_rewrite_failure_returns_original(self) -> None:
        client = _ScriptedClient("{}")
        result = await Suggester(client).rewrite_text("original")  # type: ignore[arg-type]
        assert result.rewritten_text == "original"
        assert result.changes == []

    async def test_alternatives_strip_list_markers(self) -> None:
        client = _ScriptedClient("1. first option\n2) second\n- third\n\n")
        result = await Suggester(client).provide_alternatives(  # type: ignore[arg-type]
            "crucial", "a crucial step"
        )
        assert result == ["first option", "second", "third"]
        assert client.calls[0][2] is False
