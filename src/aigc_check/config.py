"""Environment-based settings and the detector configuration surface."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from aigc_check.constants import RuleType, Severity

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and environment variables."""

    # LLM Provider
    gemini_api_key: str = ""

    # Model chain (first = primary, rest = fallbacks tried in order)
    litellm_model_chain: Annotated[list[str], NoDecode] = [
        "gemini/gemini-pro",
    ]
    llm_temperature: float = 0.3
    llm_max_tokens: int = 500
    llm_timeout_seconds: int = 30

    # Layers
    multimodal_enabled: bool = False
    statistics_enabled: bool = True
    semantic_enabled: bool = False

    # Semantic response cache
    cache_enabled: bool = True
    cache_ttl_seconds: int = 3600
    cache_max_entries: int = 1000
    cache_sweep_seconds: int = 300

    # Detector configuration file (YAML); missing file = defaults
    config_path: Path = Path("configs/default.yaml")

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @field_validator("litellm_model_chain", mode="before")
    @classmethod
    def _parse_chain(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("litellm_model_chain")
    @classmethod
    def _validate_chain(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError(
                "litellm_model_chain must contain at least one model"
            )
        seen: set[str] = set()
        dupes: list[str] = []
        for m in v:
            if m in seen:
                dupes.append(m)
            seen.add(m)
        if dupes:
            logger.warning(
                "Duplicate models in LITELLM_MODEL_CHAIN: %s",
                ", ".join(dupes),
            )
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "extra": "ignore",
    }


# ── Detector configuration ───────────────────────────────


class RuleConfig(BaseModel):
    """Per-rule switch, threshold and severity."""

    enabled: bool = True
    threshold: int = 1
    severity: Severity = Severity.MEDIUM


class RulePatterns(BaseModel):
    """Literal and regex lists the signal detectors scan for."""

    high_freq_words: list[str] = [
        "crucial",
        "pivotal",
        "vital",
        "groundbreaking",
        "revolutionary",
        "profound",
        "significant",
        "关键",
        "至关重要",
        "革命性",
        "突破性",
    ]
    sentence_starters: list[str] = [
        "Additionally",
        "Furthermore",
        "Moreover",
        "此外",
        "另外",
        "而且",
    ]
    false_range: list[str] = [
        r"from .+ to .+",
        r"从.+到.+",
    ]
    utm_parameters: list[str] = [
        "utm_source=chatgpt.com",
        "utm_source=openai",
    ]
    ghost_markers: list[str] = [
        "contentReference[oaicite:",
        "[oai_citation:",
        "turn0search",
    ]
    placeholder_dates: list[str] = [
        "2025-XX-XX",
        "YYYY-MM-DD",
        "20XX",
    ]
    markdown_markers: list[str] = ["##", "**", "```"]
    markdown_regexes: list[str] = [r"\[[^\]\n]+\]\([^)\s]+\)"]
    knowledge_cutoff: list[str] = [
        "As of my last knowledge update",
        "As of my training data",
        "截至我的知识更新",
        "根据我的训练数据",
    ]
    collaborative: list[str] = [
        "I hope this helps",
        "Let me know if",
        "Feel free to",
        "希望这能帮到你",
        "如果需要",
        "随时告诉我",
    ]
    first_person_pronouns: list[str] = [
        "I", "me", "my", "mine", "我", "我的",
    ]
    emotional_words: list[str] = [
        "feel", "think", "believe", "hope",
        "感觉", "认为", "相信", "希望",
    ]
    uncertainty_markers: list[str] = [
        "might", "maybe", "perhaps", "possibly",
        "可能", "也许", "或许",
    ]


class DimensionWeights(BaseModel):
    """Maximum score per dimension. Sums to 100 by convention."""

    vocabulary_diversity: float = 20.0
    sentence_complexity: float = 15.0
    personalization: float = 25.0
    logical_coherence: float = 20.0
    emotional_authenticity: float = 20.0


class LayerWeights(BaseModel):
    """Relative weight of each analysis layer in the fused score."""

    rule_layer: float = 0.4
    statistics_layer: float = 0.3
    semantic_layer: float = 0.3

    @property
    def total(self) -> float:
        return self.rule_layer + self.statistics_layer + self.semantic_layer


RULE_ONLY_WEIGHTS = LayerWeights(
    rule_layer=1.0, statistics_layer=0.0, semantic_layer=0.0
)
TWO_LAYER_WEIGHTS = LayerWeights(
    rule_layer=0.55, statistics_layer=0.45, semantic_layer=0.0
)


class ConfidenceThresholds(BaseModel):
    """Confidence gates for invoking the costlier layers."""

    high: float = 0.85
    medium: float = 0.60
    low: float = 0.40


class MultimodalConfig(BaseModel):
    """Tiered multi-layer detection switches."""

    enabled: bool = False
    enable_statistics: bool = True
    enable_semantic: bool = False
    weights: LayerWeights = Field(default_factory=LayerWeights)
    confidence_thresholds: ConfidenceThresholds = Field(
        default_factory=ConfidenceThresholds
    )


def _default_rules() -> dict[RuleType, RuleConfig]:
    return {
        RuleType.HIGH_FREQ_WORDS: RuleConfig(
            threshold=3, severity=Severity.HIGH
        ),
        RuleType.SENTENCE_STARTERS: RuleConfig(
            threshold=5, severity=Severity.HIGH
        ),
        RuleType.FALSE_RANGE: RuleConfig(
            threshold=2, severity=Severity.MEDIUM
        ),
        RuleType.CITATION_ANOMALY: RuleConfig(
            threshold=1, severity=Severity.CRITICAL
        ),
        RuleType.EM_DASH: RuleConfig(
            threshold=5, severity=Severity.MEDIUM
        ),
        RuleType.MARKDOWN: RuleConfig(
            threshold=3, severity=Severity.HIGH
        ),
        RuleType.EMOJI: RuleConfig(
            threshold=5, severity=Severity.MEDIUM
        ),
        RuleType.KNOWLEDGE_CUTOFF: RuleConfig(
            threshold=1, severity=Severity.CRITICAL
        ),
        RuleType.COLLABORATIVE: RuleConfig(
            threshold=3, severity=Severity.HIGH
        ),
        RuleType.PERFECTIONISM: RuleConfig(
            threshold=5, severity=Severity.HIGH
        ),
    }


class DetectorConfig(BaseModel):
    """Everything the detection pipeline reads at construction time."""

    rules: dict[RuleType, RuleConfig] = Field(
        default_factory=_default_rules
    )
    patterns: RulePatterns = Field(default_factory=RulePatterns)
    weights: DimensionWeights = Field(default_factory=DimensionWeights)
    multimodal: MultimodalConfig = Field(
        default_factory=MultimodalConfig
    )

    def rule(self, rule_type: RuleType) -> RuleConfig:
        """Config for one rule; unknown rules get an enabled default."""
        return self.rules.get(rule_type, RuleConfig())

    def is_enabled(self, rule_type: RuleType) -> bool:
        return self.rule(rule_type).enabled


DEFAULT_DETECTOR_CONFIG = DetectorConfig()


def load_detector_config(path: Path) -> DetectorConfig:
    """Load detector config from YAML, merged over the defaults.

    A missing file yields the defaults. Rules absent from the file keep
    their default settings; fields absent from a listed rule keep the
    default for that rule.
    """
    if not path.exists():
        logger.info("event=config_default path=%s", path)
        return DetectorConfig()

    raw: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return DetectorConfig()
    if not isinstance(raw, dict):
        raise ValueError(
            f"Detector config must be a mapping, got {type(raw).__name__}"
        )

    data: dict[str, Any] = dict(raw)  # pyright: ignore[reportUnknownArgumentType]
    defaults = _default_rules()
    merged: dict[str, Any] = {
        str(k): v.model_dump() for k, v in defaults.items()
    }
    for name, override in (data.get("rules") or {}).items():
        base = merged.get(str(name), RuleConfig().model_dump())
        merged[str(name)] = {**base, **(override or {})}
    data["rules"] = merged

    config = DetectorConfig.model_validate(data)
    logger.info(
        "event=config_loaded path=%s rules=%d", path, len(config.rules)
    )
    return config


def save_detector_config(config: DetectorConfig, path: Path) -> None:
    """Write the config as YAML."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(
            config.model_dump(mode="json"),
            allow_unicode=True,
            sort_keys=False,
        ),
        encoding="utf-8",
    )
