"""Command line entrypoint: ``mix <target-file> <ingredient-file>...``."""

import argparse
import sys
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from macro_mixer.app_logging import configure_logging
from macro_mixer.config import Settings, parse_log_level
from macro_mixer.containers import build_container
from macro_mixer.domain.errors import InfeasibleError, MixError
from macro_mixer.services.report import render_inputs, render_result, render_search


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mix",
        description="Mix ingredients to match a calorie goal and macro ratio.",
    )
    parser.add_argument("target", help="target TOML file")
    parser.add_argument("ingredients", nargs="+", help="ingredient TOML files")
    parser.add_argument(
        "--step",
        type=_positive_float,
        default=None,
        dest="step_grams",
        help="grams added per search step (default from MIX_STEP_GRAMS or 1)",
    )
    parser.add_argument(
        "--max-iterations",
        type=_positive_int,
        default=None,
        dest="max_iterations",
        help="stop the search after this many steps",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="log every search decision"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface and return an exit status."""
    args = build_argparser().parse_args(argv)
    try:
        settings = _resolve_settings(args)
    except ValidationError as exc:
        print(f"error: invalid settings: {exc}", file=sys.stderr)
        return 1
    configure_logging(parse_log_level(settings.log_level))
    container = build_container(settings)

    try:
        target = container.loader.load_target(args.target)
        catalog = container.loader.load_catalog(args.ingredients)
        prepared = container.mix_service.prepare(target, catalog)
        _print_lines(render_inputs(prepared))
        proposal = container.mix_service.search(prepared)
    except InfeasibleError as exc:
        print(render_search(exc.proposal))
        _print_lines(render_result(exc.proposal))
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except MixError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(render_search(proposal))
    _print_lines(render_result(proposal))
    return 0


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = Settings()
    overrides: dict[str, object] = {}
    if args.step_grams is not None:
        overrides["step_grams"] = args.step_grams
    if args.max_iterations is not None:
        overrides["max_iterations"] = args.max_iterations
    if args.verbose:
        overrides["debug"] = True
    if not overrides:
        return settings
    return settings.model_copy(update=overrides)


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {raw}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {raw}")
    return value


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {raw}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {raw}")
    return value


def _print_lines(lines: Iterable[str]) -> None:
    for line in lines:
        print(line)


if __name__ == "__main__":
    sys.exit(main())
