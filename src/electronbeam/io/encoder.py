"""
Animation encoders.

GIF output goes through Pillow. MP4 output pipes raw RGB frames to
ffmpeg via stdin, with no intermediate files. Both flatten the engine's
RGBA frames onto an opaque background first since neither target keeps
partial transparency.
"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Iterator

import numpy as np
from PIL import Image

from electronbeam.core.canvas import flatten_alpha
from electronbeam.core.errors import EncoderError

logger = logging.getLogger(__name__)

# Quality presets: (preset, crf, pix_fmt)
QUALITY_PRESETS = {
    "high": ("slow", "18", "yuv444p"),
    "medium": ("medium", "23", "yuv420p"),
    "fast": ("ultrafast", "28", "yuv420p"),
}


def encode_gif(
    frames: Iterable[np.ndarray],
    output_path: Path,
    frame_duration: int = 100,
    loop: bool = False,
    background: tuple[int, int, int] = (0, 0, 0),
    progress_callback: Callable[[int, int], None] | None = None,
) -> Path:
    """
    Write frames as an animated GIF.

    Args:
        frames: (H, W, 4) uint8 RGBA arrays, all the same size.
        output_path: Output GIF path.
        frame_duration: Per-frame delay in milliseconds. GIF stores
            centiseconds, so this is rounded down to a multiple of 10.
        loop: Repeat forever; otherwise play once.
        background: RGB color transparent pixels are composited onto.
        progress_callback: Optional callback(current, total).

    Returns:
        Path to the output file.
    """
    frames = list(frames)
    if not frames:
        raise EncoderError("No frames to write")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    total = len(frames)
    images = []
    for i, frame in enumerate(frames):
        logger.debug("Flattening frame %d/%d", i + 1, total)
        images.append(Image.fromarray(flatten_alpha(frame, background)))
        if progress_callback:
            progress_callback(i + 1, total)

    size = images[0].size
    for i, img in enumerate(images):
        if img.size != size:
            raise EncoderError(
                f"Frame {i + 1} is {img.size[0]}x{img.size[1]}, expected {size[0]}x{size[1]}"
            )

    save_kwargs = {
        "save_all": True,
        "append_images": images[1:],
        "duration": (frame_duration // 10) * 10,
    }
    # Without a loop extension the animation plays once
    if loop:
        save_kwargs["loop"] = 0

    try:
        images[0].save(output_path, format="GIF", **save_kwargs)
    except (OSError, ValueError) as exc:
        raise EncoderError(f"Failed to write GIF {output_path}: {exc}") from exc

    logger.info("Wrote %d frames to %s", total, output_path)
    return output_path


def encode_video(
    frame_iterator: Iterator[np.ndarray],
    output_path: Path,
    width: int,
    height: int,
    fps: int = 30,
    quality: str = "medium",
    background: tuple[int, int, int] = (0, 0, 0),
    total_frames: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> Path:
    """
    Encode frames to a silent MP4 with ffmpeg.

    Args:
        frame_iterator: Yields (H, W, 4) uint8 RGBA arrays.
        output_path: Output MP4 path.
        width: Frame width.
        height: Frame height.
        fps: Frames per second.
        quality: "high", "medium", or "fast".
        background: RGB color transparent pixels are composited onto.
        total_frames: Total frame count for progress reporting.
        progress_callback: Optional callback(current_frame, total_frames).

    Returns:
        Path to the output file.
    """
    preset, crf, pix_fmt = QUALITY_PRESETS.get(quality, QUALITY_PRESETS["medium"])

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # yuv420p needs even dimensions
    scale_filter = "scale=trunc(iw/2)*2:trunc(ih/2)*2"

    cmd = [
        "ffmpeg", "-y",
        "-loglevel", "error",
        # Raw video input from pipe
        "-f", "rawvideo",
        "-pix_fmt", "rgb24",
        "-s", f"{width}x{height}",
        "-r", str(fps),
        "-i", "pipe:0",
        # Video encoding
        "-vf", scale_filter,
        "-c:v", "libx264",
        "-preset", preset,
        "-crf", crf,
        "-pix_fmt", pix_fmt,
        "-an",
        str(output_path),
    ]

    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise EncoderError("ffmpeg not found on PATH") from exc

    frame_count = 0
    try:
        for frame in frame_iterator:
            proc.stdin.write(flatten_alpha(frame, background).tobytes())
            frame_count += 1

            if progress_callback and total_frames:
                progress_callback(frame_count, total_frames)

    except BrokenPipeError:
        # ffmpeg died early; its exit code and stderr explain why
        pass
    except BaseException:
        proc.kill()
        proc.communicate()
        raise

    _, stderr_bytes = proc.communicate()

    if proc.returncode != 0:
        stderr = stderr_bytes.decode("utf-8", errors="replace")
        # Filter out common non-error ffmpeg messages
        error_lines = [
            line for line in stderr.split("\n")
            if "error" in line.lower() or "invalid" in line.lower()
        ]
        error_msg = "\n".join(error_lines[-5:]) if error_lines else stderr[-500:]
        raise EncoderError(
            f"ffmpeg exited with code {proc.returncode}: {error_msg}"
        )

    logger.info("Encoded %d frames to %s", frame_count, output_path)
    return output_path
