"""
CLI entry point for the electron beam animator.

Usage:
    electron-beam -i <image> -o <output.gif> [options]
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from electronbeam.core.config import AnimationMode, BeamConfig
from electronbeam.core.errors import ElectronBeamError
from electronbeam.core.renderer import ElectronBeamRenderer, frame_levels
from electronbeam.io.encoder import encode_gif, encode_video
from electronbeam.io.loader import load_image

logger = logging.getLogger("electronbeam")

PROFILES = {
    "small": {"width": 320, "height": 240},
    "medium": {"width": 640, "height": 480},
    "large": {"width": 1280, "height": 960},
}

OUTPUT_FORMATS = (".gif", ".mp4")


def _progress_bar(levels: list[float], width: int = 30):
    """Progress callback that shows the bar and the level of the last frame."""

    def _report(current: int, total: int):
        done = current / max(total, 1)
        level = levels[current - 1]
        status = f"{done * 100:5.1f}%  frame {current}/{total}  level {level:.3f}"
        if not sys.stdout.isatty():
            # Plain log lines when piped, roughly every 5%
            if current % max(1, total // 20) == 0 or current >= total:
                print(status, flush=True)
            return
        filled = int(width * done)
        sys.stdout.write(f"\r[{'=' * filled}{' ' * (width - filled)}] {status}")
        if current >= total:
            sys.stdout.write("\n")
        sys.stdout.flush()

    return _report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="electron-beam",
        description="Create CRT-style turn-off animations from still images",
    )

    parser.add_argument("-i", "--input", type=Path, required=True, help="Input image (PNG, JPEG, ...)")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output path (.gif or .mp4)")

    # Animation
    parser.add_argument(
        "-m", "--mode", type=str, default=AnimationMode.COOL_DOWN.value,
        choices=[m.value for m in AnimationMode],
        help="Animation mode (default: cool-down)",
    )
    parser.add_argument("-f", "--frames", type=int, default=30, help="Number of frames (default: 30)")
    parser.add_argument(
        "-d", "--duration", type=int, default=100,
        help="Frame duration in milliseconds (default: 100)",
    )
    parser.add_argument(
        "--v-stretch", type=float, default=0.5,
        help="Vertical stretch duration [0.0-1.0], runs first (default: 0.5)",
    )
    parser.add_argument(
        "--h-stretch", type=float, default=0.5,
        help="Horizontal stretch duration [0.0-1.0], runs second (default: 0.5)",
    )
    parser.add_argument("-r", "--reverse", action="store_true", help="Play the animation backwards")
    parser.add_argument("-l", "--loop", action="store_true", help="Loop the animation")

    # Resolution
    parser.add_argument(
        "-p", "--profile", type=str, default=None,
        choices=sorted(PROFILES),
        help="Output size preset (small: 320x240, medium: 640x480, large: 1280x960)",
    )
    parser.add_argument("--width", type=int, default=None, help="Output width (overrides profile)")
    parser.add_argument("--height", type=int, default=None, help="Output height (overrides profile)")

    # Performance
    parser.add_argument(
        "-j", "--workers", type=int, default=1,
        help="Render frames on N threads (default: 1)",
    )

    # Logging
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser


def configure_logging(verbose: bool = False, debug: bool = False):
    """Root logger at WARNING, INFO with --verbose, DEBUG with --debug."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def validate_arguments(args: argparse.Namespace) -> list[str]:
    """Return a list of problems with the parsed arguments (empty if valid)."""
    errors = []
    if not args.input.exists():
        errors.append(f"Input file does not exist: {args.input}")
    if args.frames <= 0:
        errors.append("Frame count must be greater than 0")
    if args.duration <= 0:
        errors.append("Frame duration must be greater than 0")
    if not 0.0 <= args.v_stretch <= 1.0:
        errors.append("Vertical stretch duration must be between 0.0 and 1.0")
    if not 0.0 <= args.h_stretch <= 1.0:
        errors.append("Horizontal stretch duration must be between 0.0 and 1.0")
    if args.width is not None and args.width <= 0:
        errors.append("Width must be greater than 0")
    if args.height is not None and args.height <= 0:
        errors.append("Height must be greater than 0")
    if args.workers <= 0:
        errors.append("Worker count must be greater than 0")
    if args.output.suffix.lower() not in OUTPUT_FORMATS:
        errors.append(f"Unsupported output format {args.output.suffix!r} (use .gif or .mp4)")
    return errors


def resolve_dimensions(
    image_width: int,
    image_height: int,
    width: int | None = None,
    height: int | None = None,
    profile: str | None = None,
) -> tuple[int, int]:
    """
    Output size from explicit values, a profile, or the input image.

    When only one side is given the other follows the input's aspect ratio.
    """
    if width is None and height is None and profile is not None:
        p_cfg = PROFILES[profile]
        return p_cfg["width"], p_cfg["height"]

    if width is not None and height is not None:
        return width, height
    if width is not None:
        aspect = image_height / image_width
        return width, max(1, int(width * aspect))
    if height is not None:
        aspect = image_width / image_height
        return max(1, int(height * aspect)), height
    return image_width, image_height


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)
    logger.info("Starting electron-beam")
    logger.debug("Arguments: %s", args)

    errors = validate_arguments(args)
    if errors:
        for err in errors:
            print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)

    output = args.output
    if not output.parent.exists():
        logger.warning("Output directory does not exist, creating: %s", output.parent)
        output.parent.mkdir(parents=True, exist_ok=True)

    try:
        _run(args)
    except ElectronBeamError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def _run(args: argparse.Namespace):
    # Step 1: Load
    print(f"Loading image: {args.input}")
    image = load_image(args.input)
    img_h, img_w = image.shape[:2]

    width, height = resolve_dimensions(img_w, img_h, args.width, args.height, args.profile)

    config = BeamConfig(
        width=width,
        height=height,
        mode=AnimationMode.parse(args.mode),
        v_stretch_duration=args.v_stretch,
        h_stretch_duration=args.h_stretch,
    )

    renderer = ElectronBeamRenderer(config)
    renderer.prepare(image)

    # Step 2: Render
    levels = frame_levels(args.frames, reverse=args.reverse)
    print(f"\nRendering {len(levels)} frames at {width}x{height} ({config.mode.value})")
    t0 = time.time()
    frames = renderer.render_frames(levels, workers=args.workers, progress_callback=_progress_bar(levels))
    render_elapsed = time.time() - t0

    # Step 3: Encode
    t1 = time.time()
    if args.output.suffix.lower() == ".mp4":
        fps = max(1, round(1000 / args.duration))
        encode_video(
            frame_iterator=iter(frames),
            output_path=args.output,
            width=width,
            height=height,
            fps=fps,
            total_frames=len(frames),
        )
    else:
        encode_gif(frames, args.output, frame_duration=args.duration, loop=args.loop)
    encode_elapsed = time.time() - t1

    file_size_kb = args.output.stat().st_size / 1024
    print(f"\nDone! {file_size_kb:.1f} KB")
    print(f"  Render took {render_elapsed:.2f}s, encode took {encode_elapsed:.2f}s")
    print(f"  Output: {args.output}")


if __name__ == "__main__":
    main()
