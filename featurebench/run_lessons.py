#!/usr/bin/env python3
"""
Lesson runner.

Loads the configuration, then runs each selected chapter in order. The
comparison chapter times the string builders with the Recorder and can
export its results.
"""
import logging
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional

from featurebench.cli.cli import parse_lesson_args
from featurebench.config.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader
from featurebench.config.lesson_config import LessonConfig
from featurebench.consts.ChapterType import ChapterType
from featurebench.service.comparison.comparison_runner import ComparisonRunner
from featurebench.service.concurrency import task_demo
from featurebench.service.lessons import control_flow, conversion, operators, strings
from featurebench.service.recorder.recorder import Recorder
from featurebench.util.log_config import set_package_level, setup_logger

logger = setup_logger(__name__)


def run_comparison(config: LessonConfig, out_dir: Optional[Path] = None) -> None:
    settings = config.comparison
    unknown = [name for name in settings.workloads if name not in strings.STRING_BUILDERS]
    if unknown:
        raise ValueError(f"Unknown comparison workload(s): {', '.join(unknown)}")

    workloads = {
        name: partial(strings.STRING_BUILDERS[name], settings.string_parts)
        for name in settings.workloads
    }
    runner = ComparisonRunner(
        workloads,
        repeat=settings.repeat,
        recorder_factory=lambda name: Recorder(
            collect_garbage=config.recorder.collect_garbage,
            echo=False,
            label=name
        ),
    )
    result = runner.run()
    print(result.format_table())
    print(f"Fastest: {result.fastest().name}")

    if out_dir is not None:
        paths = result.save(out_dir)
        logger.info(f"✓ Comparison rows exported to: {paths['csv'].resolve()}")
        logger.info(f"✓ Summary exported to: {paths['summary'].resolve()}")
        logger.info(f"✓ Raw data exported to: {paths['raw_data'].resolve()}")


def build_chapter(chapter: ChapterType, config: LessonConfig,
                  out_dir: Optional[Path] = None) -> Callable[[], None]:
    if chapter == ChapterType.OPERATORS:
        return operators.run
    elif chapter == ChapterType.CONTROL_FLOW:
        return control_flow.run
    elif chapter == ChapterType.CONVERSION:
        return conversion.run
    elif chapter == ChapterType.STRINGS:
        return strings.run
    elif chapter == ChapterType.CONCURRENCY:
        recorder = Recorder(collect_garbage=config.recorder.collect_garbage,
                            echo=config.recorder.echo, label="parallel tasks")
        return partial(task_demo.run, config.pool, config.shared_state, recorder)
    elif chapter == ChapterType.COMPARISON:
        return partial(run_comparison, config, out_dir)

    raise ValueError(f"Unsupported chapter: {chapter}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_lesson_args(argv)

    config_dir = Path(args.config_dir) if args.config_dir else DEFAULT_CONFIG_PATH
    loader = ConfigLoader(config_dir, env=args.env)
    config = loader.config_data

    if args.verbose:
        set_package_level(logging.DEBUG)
    elif args.quiet:
        set_package_level(logging.WARNING)
    else:
        set_package_level(logging.getLevelName(config.log_level))

    if args.env:
        logger.info(f"Loaded configuration with environment override: {args.env}")

    out = args.out or config.output_cwd
    out_dir = Path(out) if out else None

    chapters = loader.select_chapters(args.chapter)
    logger.info(f"Running {len(chapters)} chapter(s)")
    for idx, chapter in enumerate(chapters, 1):
        logger.info("-" * 60)
        logger.info(f"Chapter {idx}/{len(chapters)}: {chapter.value}")
        logger.info("-" * 60)
        try:
            build_chapter(chapter, config, out_dir)()
        except Exception as e:
            logger.error(f"Chapter '{chapter.value}' failed: {e}")
            raise
        logger.info(f"✓ Chapter {idx}/{len(chapters)} completed")

    logger.info("All chapters completed successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
