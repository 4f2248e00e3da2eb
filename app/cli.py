"""
Command-line interface for gradebook rubric operations.

Validate rubric files, score rubric selections, and manage the rubric
library without a user interface.

Usage::

    python -m cli validate rubric.json
    python -m cli score rubric.json --total-points 100 --select "Organization=3"
    python -m cli score rubric.json --total-points 40 --select "Ideas=4" --format json
    python -m cli rubrics --grade 5
    python -m cli install-defaults ~/.gradebook/rubrics
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.rubric_library import RubricLibrary
from grading.rubric import Rubric, validate_rubric
from grading.rubric_scores import RubricScoreStore

_CLI_STUDENT = "cli"
_CLI_ASSIGNMENT = "cli"


def try_load_rubric(filepath: str) -> tuple[Rubric | None, str]:
    """Load and validate a rubric JSON file without exiting.

    Returns:
        (rubric, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"
    except OSError as e:
        return None, f"cannot read {filepath}: {e}"

    try:
        validate_rubric(data)
    except ValueError as e:
        return None, f"invalid rubric: {e}"

    return Rubric.from_dict(data), ""


def parse_selection(text: str) -> tuple[str, int]:
    """Parse a ``Criterion=LEVEL`` argument.

    Raises:
        argparse.ArgumentTypeError: If the text is not of that form.
    """
    name, sep, level = text.rpartition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected Criterion=LEVEL, got '{text}'")
    try:
        return name.strip(), int(level)
    except ValueError:
        raise argparse.ArgumentTypeError(f"level must be a whole number, got '{level}'") from None


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a rubric file."""
    rubric, error = try_load_rubric(args.rubric)
    if rubric is None:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    levels = sum(len(c.levels) for c in rubric.criteria)
    print(f"{rubric.rubric_id}: valid ({len(rubric.criteria)} criteria, {levels} levels)")
    return 0


def cmd_score(args: argparse.Namespace) -> int:
    """Score a set of level selections against a rubric."""
    rubric, error = try_load_rubric(args.rubric)
    if rubric is None:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    if args.total_points <= 0:
        print("Error: --total-points must be positive", file=sys.stderr)
        return 1

    selections = dict(args.select or [])
    unknown = [name for name in selections if rubric.criterion(name) is None]
    for name in unknown:
        print(f"Warning: rubric has no criterion '{name}'", file=sys.stderr)

    store = RubricScoreStore(level_scale=args.scale)
    store.save_selections(_CLI_STUDENT, _CLI_ASSIGNMENT, selections, args.total_points)
    breakdown = store.score_breakdown(rubric, _CLI_STUDENT, _CLI_ASSIGNMENT)
    total = sum(cs.points for cs in breakdown)

    if args.format == "json":
        output = {
            "rubric": rubric.rubric_id,
            "total_points": args.total_points,
            "score": total,
            "criteria": [
                {
                    "criterion": cs.criterion,
                    "level": cs.level,
                    "percentage": cs.percentage,
                    "points": cs.points,
                }
                for cs in breakdown
            ],
        }
        print(json.dumps(output, indent=2))
    else:
        width = max(len(cs.criterion) for cs in breakdown)
        for cs in breakdown:
            level = "-" if cs.level is None else str(cs.level)
            print(f"{cs.criterion:<{width}}  level {level:>2}  {cs.points:>4} pts")
        print(f"{'Total':<{width}}            {total:>4} / {args.total_points:g}")
    return 0


def cmd_rubrics(args: argparse.Namespace) -> int:
    """List available rubrics."""
    library = RubricLibrary(user_dir=Path(args.user_dir) if args.user_dir else None)
    if args.grade is not None:
        rubrics = library.rubrics_for_grade(args.grade)
    else:
        rubrics = library.list_rubrics()

    if not rubrics:
        print("No rubrics found", file=sys.stderr)
        return 1
    for rubric in rubrics:
        print(f"{rubric.rubric_id}\t{rubric.title}")
    return 0


def cmd_install_defaults(args: argparse.Namespace) -> int:
    """Write the built-in rubrics into a directory."""
    library = RubricLibrary(user_dir=Path(args.directory))
    try:
        written = library.install_defaults()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not written:
        print(f"{args.directory} already contains rubrics; nothing written", file=sys.stderr)
        return 0
    for path in written:
        print(path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="gradebook-cli",
        description="Gradebook rubric tools: validate, score and list rubrics from the command line.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # validate
    val_parser = subparsers.add_parser("validate", help="Validate a rubric JSON file")
    val_parser.add_argument("rubric", help="Path to rubric JSON file")

    # score
    score_parser = subparsers.add_parser("score", help="Score level selections against a rubric")
    score_parser.add_argument("rubric", help="Path to rubric JSON file")
    score_parser.add_argument(
        "--total-points", "-t", type=float, required=True, help="Points the assignment is worth"
    )
    score_parser.add_argument(
        "--select",
        "-s",
        type=parse_selection,
        action="append",
        metavar="CRITERION=LEVEL",
        help="Selected level for a criterion (repeatable)",
    )
    score_parser.add_argument(
        "--scale",
        choices=["rubric", "standard"],
        default="rubric",
        help="Take level percentages from the rubric or the standard scale (default: rubric)",
    )
    score_parser.add_argument(
        "--format", "-f", choices=["text", "json"], default="text", help="Output format (default: text)"
    )

    # rubrics
    list_parser = subparsers.add_parser("rubrics", help="List available rubrics")
    list_parser.add_argument("--user-dir", help="Directory of user rubric JSON files")
    list_parser.add_argument("--grade", type=int, help="Only rubrics for this grade level")

    # install-defaults
    inst_parser = subparsers.add_parser("install-defaults", help="Write built-in rubrics to a directory")
    inst_parser.add_argument("directory", help="Target directory")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "validate": cmd_validate,
        "score": cmd_score,
        "rubrics": cmd_rubrics,
        "install-defaults": cmd_install_defaults,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
