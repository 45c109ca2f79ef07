"""
Command-line options for the featurebench runner.
"""
import argparse
from typing import List, Optional

from featurebench.consts.ChapterType import ChapterType


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common --env option.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with the --env argument.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    return parser


def build_lesson_parser() -> argparse.ArgumentParser:
    parser = build_env_parser("Run featurebench lesson chapters")
    parser.add_argument(
        "--config-dir",
        type=str,
        default=None,
        help="Directory holding config.yaml (default: the bundled config_yaml)",
    )
    parser.add_argument(
        "--chapter",
        action="append",
        choices=[c.value for c in ChapterType],
        default=None,
        help="Chapter to run; repeat to run several (default: chapters from config)",
    )
    parser.add_argument(
        "--out",
        type=str,
        default="",
        help="If set, write comparison.csv and summary.json to this directory",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Log warnings and errors only")
    return parser


def parse_lesson_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_lesson_parser().parse_args(argv)
