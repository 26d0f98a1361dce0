"""Detection orchestration — single-layer and tiered multimodal requests."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from datetime import datetime
from types import TracebackType

from pydantic import BaseModel, Field

from aigc_check.config import DetectorConfig, Settings, load_detector_config
from aigc_check.constants import (
    DEFAULT_SEMANTIC_CONFIDENCE,
    ERROR_TRUNCATION_CHARS,
    DetectionMode,
    RiskLevel,
    RuleType,
    StageOutcome,
)
from aigc_check.detection.engine import RuleEngine
from aigc_check.detection.schemas import RuleResult
from aigc_check.logger import DetectionLogger
from aigc_check.pipeline import StageResult, sync_stage
from aigc_check.resilience.errors import (
    ConfigurationError,
    ErrorClass,
    classify_error,
)
from aigc_check.scoring.calculator import DimensionCalculator, risk_level
from aigc_check.scoring.fusion import (
    detection_mode,
    effective_weights,
    explain_fusion,
    fuse_confidence,
    fuse_scores,
    needs_semantic,
    needs_statistics,
    rule_confidence,
    rule_layer_details,
)
from aigc_check.scoring.schemas import (
    MultimodalResult,
    Score,
    SemanticLayerDetails,
    StatisticsLayerDetails,
)
from aigc_check.semantic.analyzer import SemanticAnalyzer
from aigc_check.semantic.cache import ResponseCache
from aigc_check.semantic.client import SemanticClient
from aigc_check.semantic.schemas import SemanticAnalysis
from aigc_check.semantic.suggester import Suggester
from aigc_check.statistics.analyzer import StatisticsAnalyzer
from aigc_check.statistics.schemas import StatisticsResult
from aigc_check.suggestions import (
    Suggestion,
    convert_llm_suggestions,
    generate_suggestions,
    issues_from_results,
)

logger = logging.getLogger(__name__)


class DetectionResult(BaseModel):
    """Everything returned for one detection request."""

    request_id: str
    text: str
    score: Score
    rule_results: list[RuleResult] = Field(
        default_factory=lambda: list[RuleResult]()
    )
    suggestions: list[Suggestion] = Field(
        default_factory=lambda: list[Suggestion]()
    )
    risk_level: RiskLevel
    process_time_ms: float = 0.0
    detected_at: datetime
    multimodal: MultimodalResult | None = None


def generate_request_id(now: datetime | None = None) -> str:
    """Timestamp to the second followed by six digits of microseconds."""
    now = now or datetime.now()
    return f"{now:%Y%m%d%H%M%S}{now.microsecond:06d}"


def statistics_details(stats: StatisticsResult) -> StatisticsLayerDetails:
    return StatisticsLayerDetails(
        type_token_ratio=stats.vocabulary.ttr,
        vocabulary_richness=stats.vocabulary.richness,
        sentence_length_variance=stats.sentence.length_std_dev,
        sentence_complexity=stats.sentence.complexity_score,
        perplexity_score=stats.perplexity.score,
        ai_probability=stats.ai_probability,
        details=list(stats.details),
    )


def semantic_details(analysis: SemanticAnalysis) -> SemanticLayerDetails:
    return SemanticLayerDetails(
        ai_pattern_score=analysis.ai_probability,
        detected_features=[f.name for f in analysis.features],
        explanation=analysis.explanation,
        from_cache=analysis.from_cache,
    )


class DetectionService:
    """Runs the rule layer and, in multimodal mode, the gated extra layers.

    The statistics and semantic collaborators are optional. A missing
    collaborator behaves like a layer that was never needed.
    """

    def __init__(
        self,
        config: DetectorConfig,
        *,
        statistics: StatisticsAnalyzer | None = None,
        semantic: SemanticAnalyzer | None = None,
        suggester: Suggester | None = None,
        semantic_timeout: float = 30.0,
        detection_logger: DetectionLogger | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        if config.multimodal.enable_semantic and semantic is None:
            raise ConfigurationError(
                "semantic layer is enabled but no semantic analyzer "
                "is configured"
            )
        self._config = config
        self.engine = RuleEngine.with_builtin_rules(config)
        self._calculator = DimensionCalculator(config)
        self._statistics = statistics
        self._semantic = semantic
        self._suggester = suggester
        self._semantic_timeout = semantic_timeout
        self._audit = detection_logger
        self._cache = cache

    async def __aenter__(self) -> DetectionService:
        if self._cache is not None:
            self._cache.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._cache is not None:
            await self._cache.stop()

    async def detect(
        self,
        text: str,
        *,
        multimodal: bool | None = None,
        rule_types: Iterable[RuleType] | None = None,
    ) -> DetectionResult:
        """Detect generated text.

        ``multimodal`` overrides the configured mode for this request;
        ``rule_types`` restricts the rule layer to the named rules.
        """
        start = time.monotonic()
        request_id = generate_request_id()
        use_multimodal = (
            self._config.multimodal.enabled if multimodal is None else multimodal
        )

        rule_results = await self._run_rules(request_id, text, rule_types)
        score = self._calculator.calculate(rule_results)
        suggestions = generate_suggestions(rule_results)

        fused: MultimodalResult | None = None
        final_score = score
        if use_multimodal:
            fused, semantic_ran = await self._fuse(
                request_id, text, rule_results, score
            )
            final_score = Score(
                total=fused.final_score,
                dimensions=score.dimensions,
                breakdown=score.breakdown,
            )
            if semantic_ran:
                suggestions.extend(
                    await self._llm_suggestions(
                        request_id, text, rule_results
                    )
                )

        elapsed = (time.monotonic() - start) * 1000
        level = risk_level(final_score.total)
        if self._audit is not None:
            self._audit.log_request(
                request_id,
                text_length=len(text),
                mode=(
                    fused.detection_mode if fused else DetectionMode.RULE_ONLY
                ),
                score=final_score.total,
                risk_level=level,
                duration_ms=elapsed,
            )
        logger.info(
            "event=detection_done request_id=%s score=%.2f risk=%s "
            "duration_ms=%.0f",
            request_id,
            final_score.total,
            level,
            elapsed,
        )
        return DetectionResult(
            request_id=request_id,
            text=text,
            score=final_score,
            rule_results=rule_results,
            suggestions=suggestions,
            risk_level=level,
            process_time_ms=elapsed,
            detected_at=datetime.now(),
            multimodal=fused,
        )

    # ── Layers ───────────────────────────────────────────

    async def _run_rules(
        self,
        request_id: str,
        text: str,
        rule_types: Iterable[RuleType] | None,
    ) -> list[RuleResult]:
        start = time.monotonic()
        if rule_types is None:
            results = await self.engine.check(text)
        else:
            results = await self.engine.check_subset(text, rule_types)
        self._stage(
            request_id,
            "rules",
            StageOutcome.COMPLETED,
            (time.monotonic() - start) * 1000,
        )
        return results

    async def _fuse(
        self,
        request_id: str,
        text: str,
        rule_results: list[RuleResult],
        score: Score,
    ) -> tuple[MultimodalResult, bool]:
        mm = self._config.multimodal
        thresholds = mm.confidence_thresholds
        rule_conf = rule_confidence(rule_results, score)

        stats: StatisticsResult | None = None
        if (
            mm.enable_statistics
            and self._statistics is not None
            and needs_statistics(rule_conf, thresholds)
        ):
            stats = await self._run_statistics(
                self._statistics, request_id, text
            )
        else:
            self._stage(request_id, "statistics", StageOutcome.SKIPPED, 0.0)
        stats_conf = 1.0 - stats.ai_probability if stats else rule_conf

        analysis: SemanticAnalysis | None = None
        if (
            mm.enable_semantic
            and self._semantic is not None
            and needs_semantic(rule_conf, stats_conf, thresholds)
        ):
            analysis = await self._run_semantic(
                self._semantic, request_id, text
            )
        else:
            self._stage(request_id, "semantic", StageOutcome.SKIPPED, 0.0)

        mode = detection_mode(
            statistics_ran=stats is not None,
            semantic_ran=analysis is not None,
        )
        weights = effective_weights(
            mode, mm.weights, statistics_ran=stats is not None
        )
        stats_score = stats.human_score if stats else 0.0
        semantic_score = 100.0 - analysis.ai_probability if analysis else 0.0
        semantic_conf = (
            1.0 - analysis.ai_probability / 100.0
            if analysis
            else DEFAULT_SEMANTIC_CONFIDENCE
        )

        result = MultimodalResult(
            rule_layer_score=score.total,
            statistics_layer_score=stats_score,
            semantic_layer_score=semantic_score,
            final_score=fuse_scores(
                score.total, stats_score, semantic_score, weights
            ),
            confidence=fuse_confidence(
                rule_conf, stats_conf, semantic_conf, weights
            ),
            layer_weights=weights,
            detection_mode=mode,
            rule_layer_details=rule_layer_details(rule_results),
            statistics_layer_details=(
                statistics_details(stats) if stats else None
            ),
            semantic_layer_details=(
                semantic_details(analysis) if analysis else None
            ),
        )
        result.fusion_explanation = explain_fusion(result)
        logger.debug(
            "event=fusion_done request_id=%s mode=%s rule_conf=%.2f "
            "final=%.2f",
            request_id,
            mode,
            rule_conf,
            result.final_score,
        )
        return result, analysis is not None

    async def _run_statistics(
        self,
        analyzer: StatisticsAnalyzer,
        request_id: str,
        text: str,
    ) -> StatisticsResult | None:
        outcome: StageResult[StatisticsResult] = await sync_stage(
            "statistics", analyzer.analyze
        ).run(text)
        self._stage(
            request_id,
            "statistics",
            outcome.status,
            outcome.duration_ms,
            outcome.error,
        )
        return outcome.output if outcome.ok else None

    async def _run_semantic(
        self,
        analyzer: SemanticAnalyzer,
        request_id: str,
        text: str,
    ) -> SemanticAnalysis | None:
        """Call the semantic layer under a deadline; any failure drops it."""
        start = time.monotonic()
        try:
            analysis = await asyncio.wait_for(
                analyzer.analyze_text(text),
                timeout=self._semantic_timeout,
            )
        except Exception as exc:
            self._collaborator_failed(request_id, "semantic", exc, start)
            return None
        self._stage(
            request_id,
            "semantic",
            StageOutcome.COMPLETED,
            (time.monotonic() - start) * 1000,
        )
        return analysis

    async def _llm_suggestions(
        self,
        request_id: str,
        text: str,
        rule_results: list[RuleResult],
    ) -> list[Suggestion]:
        if self._suggester is None:
            return []
        issues = issues_from_results(rule_results)
        if not issues:
            return []
        start = time.monotonic()
        try:
            raw = await asyncio.wait_for(
                self._suggester.generate_suggestions(text, issues),
                timeout=self._semantic_timeout,
            )
        except Exception as exc:
            self._collaborator_failed(request_id, "suggestions", exc, start)
            return []
        self._stage(
            request_id,
            "suggestions",
            StageOutcome.COMPLETED,
            (time.monotonic() - start) * 1000,
        )
        return convert_llm_suggestions(raw)

    # ── Logging helpers ──────────────────────────────────

    def _collaborator_failed(
        self,
        request_id: str,
        component: str,
        exc: Exception,
        start: float,
    ) -> None:
        error_class = classify_error(exc)
        message = (str(exc) or type(exc).__name__)[:ERROR_TRUNCATION_CHARS]
        log = (
            logger.error
            if error_class in (ErrorClass.CLIENT, ErrorClass.UNKNOWN)
            else logger.warning
        )
        log(
            "event=layer_degraded request_id=%s component=%s "
            "error_class=%s error=%s",
            request_id,
            component,
            error_class.value,
            message,
        )
        if self._audit is not None:
            self._audit.log_error(
                request_id, component, message, error_class.value
            )
        self._stage(
            request_id,
            component,
            StageOutcome.FAILED,
            (time.monotonic() - start) * 1000,
            message,
        )

    def _stage(
        self,
        request_id: str,
        name: str,
        status: StageOutcome,
        duration_ms: float,
        error: str | None = None,
    ) -> None:
        if self._audit is not None:
            self._audit.log_stage(
                request_id, name, status, duration_ms, error
            )


# ── Construction from settings ───────────────────────────


def _needs_gemini_key(settings: Settings) -> bool:
    return any(m.startswith("gemini/") for m in settings.litellm_model_chain)


def build_detection_service(
    settings: Settings | None = None,
    config: DetectorConfig | None = None,
    *,
    detection_logger: DetectionLogger | None = None,
) -> DetectionService:
    """Wire a service from environment settings and the YAML config.

    Settings switches only ever turn layers on, except
    ``statistics_enabled`` which can turn the statistics layer off.

    Raises ``ConfigurationError`` when the semantic layer is enabled
    but the model chain needs a Gemini key that is not set.
    """
    if settings is None:
        settings = Settings()
    if config is None:
        config = load_detector_config(settings.config_path)

    mm = config.multimodal.model_copy(
        update={
            "enabled": config.multimodal.enabled
            or settings.multimodal_enabled,
            "enable_statistics": config.multimodal.enable_statistics
            and settings.statistics_enabled,
            "enable_semantic": config.multimodal.enable_semantic
            or settings.semantic_enabled,
        }
    )
    config = config.model_copy(update={"multimodal": mm})

    cache: ResponseCache | None = None
    semantic: SemanticAnalyzer | None = None
    suggester: Suggester | None = None
    if mm.enable_semantic:
        if _needs_gemini_key(settings) and not settings.gemini_api_key:
            raise ConfigurationError(
                "semantic layer is enabled but GEMINI_API_KEY is not set"
            )
        if settings.cache_enabled:
            cache = ResponseCache(
                ttl_seconds=settings.cache_ttl_seconds,
                max_entries=settings.cache_max_entries,
                sweep_seconds=settings.cache_sweep_seconds,
            )
        client = SemanticClient(settings, cache)
        semantic = SemanticAnalyzer(client)
        suggester = Suggester(client)

    return DetectionService(
        config,
        statistics=StatisticsAnalyzer() if mm.enable_statistics else None,
        semantic=semantic,
        suggester=suggester,
        semantic_timeout=settings.llm_timeout_seconds,
        detection_logger=detection_logger,
        cache=cache,
    )
