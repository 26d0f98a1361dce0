"""Tests for Settings validators and detector config loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from aigc_check.config import (
    DetectorConfig,
    LayerWeights,
    RuleConfig,
    Settings,
    load_detector_config,
    save_detector_config,
)
from aigc_check.constants import RuleType, Severity


class TestModelChainParsing:
    def test_comma_separated_string_parsed_to_list(self) -> None:
        """_parse_chain splits comma-separated strings."""
        s = Settings(litellm_model_chain="model-a,model-b")  # type: ignore[arg-type]
        assert s.litellm_model_chain == ["model-a", "model-b"]

    def test_comma_separated_with_spaces(self) -> None:
        s = Settings(litellm_model_chain="model-a , model-b")  # type: ignore[arg-type]
        assert s.litellm_model_chain == ["model-a", "model-b"]

    def test_json_list_passthrough(self) -> None:
        s = Settings(litellm_model_chain=["model-a", "model-b"])
        assert s.litellm_model_chain == ["model-a", "model-b"]


class TestModelChainValidation:
    def test_empty_chain_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one model"):
            Settings(litellm_model_chain=[])

    def test_empty_string_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one model"):
            Settings(litellm_model_chain="")  # type: ignore[arg-type]

    def test_duplicate_models_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="aigc_check.config"):
            s = Settings(
                litellm_model_chain=["model-a", "model-a", "model-b"]
            )
        assert "Duplicate models in LITELLM_MODEL_CHAIN" in caplog.text
        # Chain is preserved as-is (no dedup)
        assert s.litellm_model_chain == ["model-a", "model-a", "model-b"]

    def test_no_warning_without_duplicates(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="aigc_check.config"):
            Settings(litellm_model_chain=["model-a", "model-b"])
        assert "Duplicate" not in caplog.text


class TestDetectorConfigDefaults:
    def test_all_rules_configured(self) -> None:
        config = DetectorConfig()
        assert set(config.rules) == set(RuleType)
        assert config.rule(RuleType.HIGH_FREQ_WORDS).threshold == 3
        assert config.rule(RuleType.KNOWLEDGE_CUTOFF).severity == (
            Severity.CRITICAL
        )

    def test_unknown_rule_gets_enabled_default(self) -> None:
        config = DetectorConfig(rules={})
        assert config.rule(RuleType.EMOJI) == RuleConfig()
        assert config.is_enabled(RuleType.EMOJI)

    def test_layer_weights_total(self) -> None:
        assert LayerWeights().total == pytest.approx(1.0)
        assert LayerWeights(
            rule_layer=1, statistics_layer=1, semantic_layer=0
        ).total == 2


class TestLoadDetectorConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_detector_config(tmp_path / "absent.yaml")
        assert config == DetectorConfig()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_detector_config(path) == DetectorConfig()

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_detector_config(path)

    def test_rule_override_merges_over_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text(
            "rules:\n"
            "  emoji:\n"
            "    enabled: false\n"
            "  high_freq_words:\n"
            "    threshold: 7\n",
            encoding="utf-8",
        )
        config = load_detector_config(path)
        assert not config.is_enabled(RuleType.EMOJI)
        assert config.rule(RuleType.EMOJI).threshold == 5
        hfw = config.rule(RuleType.HIGH_FREQ_WORDS)
        assert hfw.threshold == 7
        assert hfw.severity == Severity.HIGH
        assert len(config.rules) == len(RuleType)

    def test_patterns_override(self, tmp_path: Path) -> None:
        path = tmp_path / "patterns.yaml"
        path.write_text(
            "patterns:\n  high_freq_words: [delve]\n", encoding="utf-8"
        )
        config = load_detector_config(path)
        assert config.patterns.high_freq_words == ["delve"]
        assert config.patterns.collaborative

    def test_save_then_load(self, tmp_path: Path) -> None:
        config = DetectorConfig()
        config.rules[RuleType.MARKDOWN] = RuleConfig(
            enabled=False, threshold=9, severity=Severity.LOW
        )
        path = tmp_path / "nested" / "saved.yaml"
        save_detector_config(config, path)
        assert load_detector_config(path) == config
