"""
Command line interface for the projector throw simulator.

Usage:
    # Default living-room scene
    throwsim

    # Built-in preset
    throwsim --preset meeting_ceiling

    # Scene file (may itself name a preset and override fields)
    throwsim --scene my_room.yaml --output-dir outputs/my_room

    # Print numbers only
    throwsim --preset bedroom_side --no-render
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .projection import ProjectionResult, ProjectionSolver, SimulationState
from .scenes import clamp_state, get_preset, list_presets, load_scene, save_scene
from .utils.config_loader import ConfigLoader, get_nested, load_config, set_nested
from .utils.logger import get_logger, log_function_call, setup_logger
from .viz import format_hud, render_front_view, render_report, render_top_view, save_image


logger = get_logger("throwsim.cli")

DEFAULT_CONFIG = {
    "scene": {"preset": "default", "file": None},
    "output": {"dir": "outputs/simulation", "render": True},
    "render": {"scale": 0.2},
    "logging": {"level": "INFO", "file": None},
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate where a projector's image lands on the wall",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (e.g. configs/default.yaml)",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        help="Built-in scene preset",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="YAML scene file (overrides --preset)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for images and the scene used",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Skip image rendering",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List built-in presets and exit",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> dict:
    """Merge defaults, the config file and command line overrides."""
    loader = ConfigLoader()
    config = DEFAULT_CONFIG

    if args.config:
        config = loader.merge(config, load_config(args.config))

    overrides: dict = {}
    if args.preset:
        set_nested(overrides, "scene.preset", args.preset)
    if args.scene:
        set_nested(overrides, "scene.file", args.scene)
    if args.output_dir:
        set_nested(overrides, "output.dir", args.output_dir)
    if args.no_render:
        set_nested(overrides, "output.render", False)
    if args.log_level:
        set_nested(overrides, "logging.level", args.log_level)

    return loader.merge(config, overrides)


@log_function_call(logger)
def load_state(config: dict) -> SimulationState:
    """Load the scene named by the config: file first, then preset."""
    scene_file = get_nested(config, "scene.file")
    if scene_file:
        return load_scene(scene_file)
    return get_preset(get_nested(config, "scene.preset", "default"))


def write_outputs(
    state: SimulationState,
    result: ProjectionResult,
    config: dict,
) -> Path:
    """
    Write the scene used and, unless disabled, the rendered images.

    Returns:
        Output directory.

    Raises:
        OSError: If the directory or a file cannot be written.
    """
    output_dir = Path(get_nested(config, "output.dir"))
    output_dir.mkdir(parents=True, exist_ok=True)
    save_scene(state, output_dir / "scene_used.yaml")

    if get_nested(config, "output.render", True):
        scale = float(get_nested(config, "render.scale", 0.2))
        images = {
            "front.png": render_front_view(state, result, scale=scale),
            "top.png": render_top_view(state, result, scale=scale),
            "report.png": render_report(state, result),
        }
        for name, image in images.items():
            if not save_image(image, output_dir / name):
                raise OSError(f"Failed to write image: {output_dir / name}")
        logger.info(f"Images written to {output_dir}/")

    return output_dir


def print_result(result: ProjectionResult) -> None:
    for line in format_hud(result):
        print(f"  {line}")

    if not result.is_valid:
        print(f"  Reason: {result.invalid_reason.value}")
        return

    print("  Wall corners (TL, TR, BR, BL):")
    for p in result.corners:
        print(f"    ({p.x:.1f}, {p.y:.1f})")

    if result.corrected_corners is not None:
        width, height = result.corrected_size
        if result.has_usable_correction:
            print(f"  Corrected image: {width:.0f} x {height:.0f} mm")
        else:
            print("  Corrected image: none (footprint has no usable area)")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_presets:
        for name in list_presets():
            print(name)
        return 0

    try:
        config = resolve_config(args)
        setup_logger(
            level=get_nested(config, "logging.level", "INFO"),
            log_file=get_nested(config, "logging.file"),
        )
        state = clamp_state(load_state(config))
    except (FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    solver = ProjectionSolver()
    result = solver.solve(state)

    print("Projection result:")
    print_result(result)

    try:
        output_dir = write_outputs(state, result, config)
    except OSError as e:
        print(f"Error: {e}")
        return 1

    print(f"\nResults saved to {output_dir}/")
    return 0


if __name__ == "__main__":
    sys.exit(main())
