"""Pydantic models for rule detection output."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aigc_check.constants import RuleType, Severity


class Position(BaseModel):
    """Location of one span in the analysed text."""

    line: int = 1
    column: int = 1
    offset: int = 0
    length: int = 0

    model_config = {"frozen": True}


class Match(BaseModel):
    """One occurrence found by a detector."""

    text: str
    position: Position
    context: str = ""
    reason: str = ""


class RuleResult(BaseModel):
    """Outcome of a single detector run."""

    rule_type: RuleType
    name: str
    description: str = ""
    detected: bool = False
    score: float = Field(default=100.0, ge=0.0, le=100.0)
    severity: Severity = Severity.MEDIUM
    matches: list[Match] = Field(default_factory=lambda: list[Match]())
    count: int = 0
    threshold: int = 0
    message: str = ""
