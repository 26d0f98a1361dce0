"""CLI entry point — ``aigc-check check`` and ``aigc-check rules``."""

from __future__ import annotations

# Phase 1: Singleton logging, before any transitive litellm imports
from aigc_check.logging_config import setup_logging

setup_logging()

import argparse  # noqa: E402
import asyncio  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

from aigc_check import __version__  # noqa: E402
from aigc_check.config import (  # noqa: E402
    DetectorConfig,
    Settings,
    load_detector_config,
)
from aigc_check.constants import OutputFormat, RuleType  # noqa: E402
from aigc_check.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
    set_level,
)
from aigc_check.resilience.errors import ConfigurationError  # noqa: E402

# Phase 2: Clear litellm's duplicate handlers after all imports
cleanup_third_party_handlers()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"aigc-check {__version__}")
        return 0

    if args.command == "check":
        return _run_check(args)
    if args.command == "rules":
        return _run_rules(args)
    parser.print_help()
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aigc-check",
        description=(
            "Estimate whether a text was written by a language model."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    check = sub.add_parser("check", help="Check a text")
    check.add_argument(
        "file",
        nargs="?",
        default="-",
        help="File to check, or - for stdin (default: -)",
    )
    check.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
        help="Report format (default: text)",
    )
    check.add_argument(
        "--config",
        "-c",
        default=None,
        help="Detector config YAML (default: from settings)",
    )
    check.add_argument(
        "--multimodal",
        "-m",
        action="store_true",
        help="Enable tiered statistics/semantic fusion",
    )
    check.add_argument(
        "--rules",
        "-r",
        type=str,
        default=None,
        help="Comma-separated rule names (default: all enabled)",
    )
    check.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr",
    )

    rules = sub.add_parser("rules", help="List detection rules")
    rules.add_argument(
        "--config",
        "-c",
        default=None,
        help="Detector config YAML (default: from settings)",
    )

    return parser


def _load_config(
    settings: Settings, override: str | None
) -> DetectorConfig | None:
    path = Path(override) if override else settings.config_path
    if override and not path.exists():
        print(f"Error: config not found: {path}", file=sys.stderr)
        return None
    try:
        return load_detector_config(path)
    except ValueError as exc:
        print(f"Error: invalid config {path}: {exc}", file=sys.stderr)
        return None


def _parse_rules(raw: str) -> list[RuleType] | None:
    names = [s.strip() for s in raw.split(",") if s.strip()]
    valid = {r.value for r in RuleType}
    unknown = [n for n in names if n not in valid]
    if unknown:
        print(
            f"Error: unknown rule '{unknown[0]}'. "
            f"Valid: {', '.join(sorted(valid))}",
            file=sys.stderr,
        )
        return None
    return [RuleType(n) for n in names]


def _read_text(source: str) -> str | None:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        print(f"Error: {path} does not exist", file=sys.stderr)
        return None
    return path.read_text(encoding="utf-8")


def _run_check(args: argparse.Namespace) -> int:
    """Execute the check command."""
    from aigc_check.export import export_result
    from aigc_check.logger import DetectionLogger
    from aigc_check.services.detection import build_detection_service

    if args.verbose:
        set_level("INFO")

    settings = Settings()
    config = _load_config(settings, args.config)
    if config is None:
        return 1

    rule_types = _parse_rules(args.rules) if args.rules else None
    if args.rules and rule_types is None:
        return 1

    text = _read_text(args.file)
    if text is None:
        return 1

    if args.multimodal:
        config = config.model_copy(
            update={
                "multimodal": config.multimodal.model_copy(
                    update={"enabled": True}
                )
            }
        )

    try:
        service = build_detection_service(
            settings,
            config,
            detection_logger=DetectionLogger(
                settings.log_dir, settings.log_level
            ),
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    async def _detect() -> str:
        async with service:
            result = await service.detect(text, rule_types=rule_types)
        return export_result(result, args.format)

    sys.stdout.write(asyncio.run(_detect()))
    return 0


def _run_rules(args: argparse.Namespace) -> int:
    """List every rule with its effective settings."""
    from aigc_check.detection.engine import RuleEngine

    config = _load_config(Settings(), args.config)
    if config is None:
        return 1

    engine = RuleEngine.with_builtin_rules(config)
    for rule in engine.rules():
        rc = config.rule(rule.rule_type)
        state = "on " if rc.enabled else "off"
        print(
            f"{state} {rule.rule_type:<18} threshold={rc.threshold:<3} "
            f"severity={rc.severity:<8} {rule.description}"
        )
    print(
        f"\n{engine.count_enabled_rules()} of {engine.count_rules()} "
        "rules enabled"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
