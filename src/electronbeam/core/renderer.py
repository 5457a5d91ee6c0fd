"""
Frame renderer for the electron beam animation.

Holds the configuration and the prepared source raster, validates the
animation level and dispatches each frame to the effect for the
configured mode. Rendering never mutates stored state, so frames for
different levels can be produced in any order or in parallel.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

import numpy as np

from electronbeam.core.canvas import as_rgba, resize_raster
from electronbeam.core.config import AnimationMode, BeamConfig
from electronbeam.core.effects import (
    fade,
    horizontal_stretch,
    scale_down,
    vertical_stretch,
)
from electronbeam.core.errors import InvalidLevel, NotPrepared

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unprepared:
    """No source raster has been supplied yet."""


@dataclass(frozen=True, eq=False)
class Prepared:
    """A read-only source raster resized to the configured dimensions."""

    source: np.ndarray


UNPREPARED = Unprepared()


def frame_levels(frame_count: int, reverse: bool = False) -> list[float]:
    """
    Evenly spaced levels from 0 to 1 inclusive.

    Args:
        frame_count: Number of frames (> 0).
        reverse: Run from 1 down to 0 instead.

    Returns:
        List of ``frame_count`` levels.
    """
    if frame_count <= 0:
        raise ValueError(f"frame_count must be positive, got {frame_count}")
    if frame_count == 1:
        return [1.0 if reverse else 0.0]

    last = frame_count - 1
    levels = [i / last for i in range(frame_count)]
    if reverse:
        levels = [1.0 - level for level in levels]
    return levels


class ElectronBeamRenderer:
    """
    Renders CRT warm-up / cool-down frames from a single still image.

    Usage::

        renderer = ElectronBeamRenderer(BeamConfig(width=320, height=240))
        renderer.prepare(image)
        frame = renderer.draw(0.25)
    """

    def __init__(self, config: BeamConfig | None = None):
        self.cfg = (config or BeamConfig()).validate()
        self._state: Unprepared | Prepared = UNPREPARED

    @property
    def config(self) -> BeamConfig:
        return self.cfg

    @property
    def is_prepared(self) -> bool:
        return isinstance(self._state, Prepared)

    @property
    def source(self) -> np.ndarray:
        """The prepared (read-only) source raster."""
        state = self._state
        if not isinstance(state, Prepared):
            raise NotPrepared()
        return state.source

    def prepare(self, image) -> None:
        """
        Store the source image, resized to the configured dimensions.

        Args:
            image: PIL image or (H, W, 4) / (H, W, 3) uint8 array of any size.

        Raises:
            ImageError: The raster could not be normalized or resampled.
        """
        source = as_rgba(image)
        src_h, src_w = source.shape[:2]
        if (src_w, src_h) != self.cfg.size:
            logger.debug(
                "Resizing source from %dx%d to %dx%d",
                src_w, src_h, self.cfg.width, self.cfg.height,
            )
            source = resize_raster(source, self.cfg.width, self.cfg.height)

        source.setflags(write=False)
        self._state = Prepared(source)
        logger.info("Prepared %dx%d source for %s", self.cfg.width, self.cfg.height, self.cfg.mode.value)

    def reset(self) -> None:
        """Drop the source raster and return to the unprepared state."""
        self._state = UNPREPARED

    def draw(self, level: float) -> np.ndarray:
        """
        Render the frame at an animation level.

        Args:
            level: Animation level in [0, 1].

        Returns:
            Freshly allocated (height, width, 4) uint8 RGBA array.

        Raises:
            InvalidLevel: level is outside [0, 1].
            NotPrepared: ``prepare`` has not been called.
        """
        return self._draw_with(self._state, level)

    def _draw_with(self, state, level: float) -> np.ndarray:
        if not 0.0 <= level <= 1.0:
            raise InvalidLevel(level)
        if not isinstance(state, Prepared):
            raise NotPrepared()

        cfg = self.cfg
        source = state.source

        if not cfg.mode.is_beam:
            logger.debug("Frame level=%.3f %s", level, cfg.mode.value)
            if cfg.mode is AnimationMode.FADE:
                return fade(cfg, source, level)
            return scale_down(cfg, source, level)

        if level < cfg.v_stretch_duration:
            progress = level / cfg.v_stretch_duration
            logger.debug("Frame level=%.3f vertical progress=%.3f", level, progress)
            return vertical_stretch(cfg, source, progress)

        if cfg.h_stretch_duration > 0:
            progress = (level - cfg.v_stretch_duration) / cfg.h_stretch_duration
        else:
            # No horizontal phase: the line is already gone
            progress = 1.0
        logger.debug("Frame level=%.3f horizontal progress=%.3f", level, progress)
        return horizontal_stretch(cfg, progress)

    def render_sequence(
        self,
        levels: Iterable[float],
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> Iterator[np.ndarray]:
        """
        Yield one frame per level, in order.

        Args:
            levels: Animation levels to render.
            progress_callback: Optional callback(current, total).
        """
        levels = list(levels)
        total = len(levels)
        state = self._state

        for i, level in enumerate(levels):
            yield self._draw_with(state, level)
            if progress_callback:
                progress_callback(i + 1, total)

    def render_frames(
        self,
        levels: Iterable[float],
        workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> list[np.ndarray]:
        """
        Render a batch of frames, optionally on a thread pool.

        The prepared state is captured once, so a concurrent ``prepare``
        or ``reset`` does not affect frames already in the batch.

        Args:
            levels: Animation levels to render.
            workers: Thread count; ``None`` or 1 renders serially.
            progress_callback: Optional callback(current, total).

        Returns:
            Frames in the same order as ``levels``.
        """
        levels = list(levels)
        if not workers or workers <= 1 or len(levels) <= 1:
            return list(self.render_sequence(levels, progress_callback))

        for level in levels:
            if not 0.0 <= level <= 1.0:
                raise InvalidLevel(level)
        state = self._state
        if not isinstance(state, Prepared):
            raise NotPrepared()

        total = len(levels)
        frames = []
        logger.info("Rendering %d frames on %d threads", total, workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            for i, frame in enumerate(executor.map(lambda lv: self._draw_with(state, lv), levels)):
                frames.append(frame)
                if progress_callback:
                    progress_callback(i + 1, total)
        return frames


def render_animation(
    image,
    config: BeamConfig,
    frame_count: int,
    reverse: bool = False,
    workers: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> list[np.ndarray]:
    """Prepare a renderer for ``image`` and render a full sweep of frames."""
    renderer = ElectronBeamRenderer(config)
    renderer.prepare(image)
    levels = frame_levels(frame_count, reverse=reverse)
    return renderer.render_frames(levels, workers=workers, progress_callback=progress_callback)
