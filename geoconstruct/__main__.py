import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from geoconstruct import (
    ConstructionConfig,
    Scene,
    generate_tikz_document,
    get_construction_config,
    parse_script,
    print_scene,
    run_script,
    summarize_scene,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _build_config(args: argparse.Namespace) -> ConstructionConfig:
    config = get_construction_config()
    if args.hit_radius is not None:
        config.hit_radius = args.hit_radius
    if args.dedup_tolerance is not None:
        config.dedup_tolerance = args.dedup_tolerance
    return ConstructionConfig(**vars(config))


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Replay a construction action script")
    parser.add_argument("path", help="Path to the action script")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--hit-radius",
        type=float,
        help="Distance within which a click picks an existing point (default: 10)",
    )
    parser.add_argument(
        "--dedup-tolerance",
        type=float,
        help="Per-axis window treating two coordinates as one point (default: 0.1)",
    )
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document of the final scene to the given path",
    )
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Scale the TikZ picture to a fixed size instead of raw scene units",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        config = _build_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        raise SystemExit(2)

    with open(args.path) as fin:
        text = fin.read()

    logger.info("Parsing actions from %s", args.path)
    script = parse_script(text)
    logger.info("Parsed %d action(s)", len(script.actions))

    scene = run_script(script, Scene(config))
    view = scene.view()

    print(f"Scene: {summarize_scene(view)}")
    print(print_scene(view), end="")

    if args.tikz_output_path:
        output_path = Path(args.tikz_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing TikZ document to %s", output_path)
        document = generate_tikz_document(
            view,
            title=f"replay of {Path(args.path).name}",
            normalize=args.normalize,
        )
        output_path.write_text(document, encoding="utf-8")
        print(f"TikZ document written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
