from __future__ import annotations

import argparse
import json
import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from dyncond.cli import evaluate_file
from dyncond.dates.normalizer import DateNormalizer
from dyncond.engine.evaluator import ConditionEvaluator
from dyncond.media.resolver import StaticAttachmentResolver, WordPressMediaResolver


def _build_evaluator(p: argparse.ArgumentParser, args: argparse.Namespace) -> ConditionEvaluator:
    try:
        tz = ZoneInfo(args.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        p.error(f"unknown timezone: {args.timezone}")

    dates = DateNormalizer(tz=tz, source_locale=args.locale or None)
    if args.media_base_url:
        attachments = WordPressMediaResolver(args.media_base_url)
    else:
        attachments = StaticAttachmentResolver()
    return ConditionEvaluator(dates=dates, attachments=attachments)


def _cmd_evaluate(p: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    evaluator = _build_evaluator(p, args)
    try:
        evaluate_file.run(evaluator, config_path=args.config, as_json=args.json)
    except (OSError, yaml.YAMLError, ValueError) as e:
        p.error(f"cannot read {args.config}: {e}")


def _cmd_check(p: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        settings = json.loads(args.settings)
    except ValueError as e:
        p.error(f"--settings is not valid JSON: {e}")
    if not isinstance(settings, dict):
        p.error("--settings must be a JSON object")

    evaluator = _build_evaluator(p, args)
    print("hidden" if evaluator.evaluate(settings) else "visible")


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="dyncond")
    p.add_argument("--timezone", default=os.getenv("DYNCOND_TIMEZONE", "UTC"))
    p.add_argument("--locale", default=os.getenv("DYNCOND_LOCALE"),
                   help="Locale whose day/month names appear in settings, e.g. de_DE.UTF-8")
    p.add_argument("--media-base-url", default=os.getenv("DYNCOND_MEDIA_BASE_URL"),
                   help="WordPress site used to resolve attachment ids to links")
    p.add_argument("--verbose", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_eval = sub.add_parser("evaluate", help="Evaluate every widget in a YAML/JSON file")
    p_eval.add_argument("--config", default="widgets.yaml")
    p_eval.add_argument("--json", action="store_true", help="Print results as JSON")
    p_eval.set_defaults(func=_cmd_evaluate)

    p_check = sub.add_parser("check", help="Evaluate a single settings object")
    p_check.add_argument("--settings", required=True, help="Settings as a JSON object")
    p_check.set_defaults(func=_cmd_check)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(p, args)


if __name__ == "__main__":
    main()
