"""Rule engine: detector registry plus concurrent fan-out/fan-in dispatch."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from aigc_check.config import DetectorConfig
from aigc_check.constants import RuleType
from aigc_check.detection.schemas import RuleResult
from aigc_check.detection.signals import Detector, build_detectors
from aigc_check.pipeline import ParallelGroup, StageResult, sync_stage

logger = logging.getLogger(__name__)


class RuleEngine:
    """Holds the detector registry and runs detectors concurrently.

    The registry is an immutable snapshot. ``register`` and
    ``unregister`` build a new snapshot under a lock and swap it in;
    ``check`` reads whichever snapshot is current without locking.
    """

    def __init__(self, config: DetectorConfig) -> None:
        self._config = config
        self._lock = threading.Lock()
        self._rules: Mapping[RuleType, Detector] = MappingProxyType({})

    @classmethod
    def with_builtin_rules(cls, config: DetectorConfig) -> RuleEngine:
        engine = cls(config)
        for detector in build_detectors(config):
            engine.register(detector)
        return engine

    # ── Registry ──────────────────────────────────────────

    def register(self, rule: Detector) -> None:
        """Add or replace the detector for ``rule.rule_type``."""
        with self._lock:
            updated = dict(self._rules)
            updated[rule.rule_type] = rule
            self._rules = MappingProxyType(updated)
        logger.debug("event=rule_registered rule=%s", rule.rule_type)

    def unregister(self, rule_type: RuleType) -> None:
        with self._lock:
            if rule_type not in self._rules:
                return
            updated = dict(self._rules)
            del updated[rule_type]
            self._rules = MappingProxyType(updated)
        logger.debug("event=rule_unregistered rule=%s", rule_type)

    def get(self, rule_type: RuleType) -> Detector | None:
        return self._rules.get(rule_type)

    def rules(self) -> list[Detector]:
        return list(self._rules.values())

    def enabled_rules(self) -> list[Detector]:
        return [
            rule
            for rule in self._rules.values()
            if self._config.is_enabled(rule.rule_type)
        ]

    def count_rules(self) -> int:
        return len(self._rules)

    def count_enabled_rules(self) -> int:
        return len(self.enabled_rules())

    # ── Dispatch ──────────────────────────────────────────

    async def check(self, text: str) -> list[RuleResult]:
        """Run every enabled detector and collect one result per rule."""
        return await self._dispatch(text, self.enabled_rules())

    async def check_subset(
        self, text: str, rule_types: Iterable[RuleType]
    ) -> list[RuleResult]:
        """Run only the named rules that are registered and enabled."""
        snapshot = self._rules
        selected: list[Detector] = []
        for rule_type in dict.fromkeys(rule_types):
            rule = snapshot.get(rule_type)
            if rule is not None and self._config.is_enabled(rule_type):
                selected.append(rule)
        return await self._dispatch(text, selected)

    async def _dispatch(
        self, text: str, rules: list[Detector]
    ) -> list[RuleResult]:
        group = ParallelGroup[str](
            name="rule_engine",
            stages=[sync_stage(str(r.rule_type), r.check) for r in rules],
        )
        outcomes = await group.execute(text)
        return [
            self._collect(rule, outcome)
            for rule, outcome in zip(rules, outcomes, strict=True)
        ]

    def _collect(
        self, rule: Detector, outcome: StageResult[RuleResult]
    ) -> RuleResult:
        if outcome.ok and outcome.output is not None:
            return outcome.output
        logger.error(
            "event=rule_failed rule=%s error=%s",
            rule.rule_type,
            outcome.error,
        )
        rule_config = self._config.rule(rule.rule_type)
        return RuleResult(
            rule_type=rule.rule_type,
            name=rule.name,
            description=rule.description,
            detected=False,
            score=100.0,
            severity=rule_config.severity,
            threshold=rule_config.threshold,
            message=f"Rule failed: {outcome.error}",
        )
