"""
Animation configuration.
"""

import enum
import numbers
from dataclasses import dataclass

from electronbeam.core.errors import ConfigError, InvalidMode


class AnimationMode(str, enum.Enum):
    """How the source image enters or leaves the screen."""

    WARM_UP = "warm-up"  # beam turning on
    COOL_DOWN = "cool-down"  # beam shutting off
    FADE = "fade"
    SCALE_DOWN = "scale-down"

    @classmethod
    def parse(cls, value) -> "AnimationMode":
        """
        Resolve a mode from an enum member, its value or its name.

        ``"cool-down"``, ``"COOL_DOWN"`` and ``"cool_down"`` all resolve to
        ``AnimationMode.COOL_DOWN``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            for mode in cls:
                if mode.value == key:
                    return mode
        raise InvalidMode(value)

    @property
    def is_beam(self) -> bool:
        """True for the two-phase stretch modes."""
        return self in (AnimationMode.WARM_UP, AnimationMode.COOL_DOWN)


@dataclass(frozen=True)
class BeamConfig:
    """Configuration for the electron beam renderer."""

    width: int = 640
    height: int = 480
    mode: AnimationMode = AnimationMode.COOL_DOWN

    # Share of the level axis taken by each phase of the beam modes.
    # Vertical runs first, horizontal second.
    v_stretch_duration: float = 0.5
    h_stretch_duration: float = 0.5

    def validate(self) -> "BeamConfig":
        """Raise if any field is out of range; returns self for chaining."""
        if not isinstance(self.mode, AnimationMode):
            raise InvalidMode(self.mode)
        if not isinstance(self.width, numbers.Integral) or self.width <= 0:
            raise ConfigError(f"width must be a positive integer, got {self.width}")
        if not isinstance(self.height, numbers.Integral) or self.height <= 0:
            raise ConfigError(f"height must be a positive integer, got {self.height}")
        for name in ("v_stretch_duration", "h_stretch_duration"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be between 0.0 and 1.0, got {value}")
        return self

    @property
    def size(self) -> tuple[int, int]:
        """(width, height)."""
        return (self.width, self.height)


class BeamConfigBuilder:
    """
    Fluent construction of a ``BeamConfig``.

    Example::

        renderer = (
            BeamConfigBuilder()
            .dimensions(320, 240)
            .mode("warm-up")
            .stretch_durations(0.3, 0.7)
            .build()
        )
    """

    def __init__(self, config: BeamConfig | None = None):
        base = config or BeamConfig()
        self._fields = {
            "width": base.width,
            "height": base.height,
            "mode": base.mode,
            "v_stretch_duration": base.v_stretch_duration,
            "h_stretch_duration": base.h_stretch_duration,
        }

    def dimensions(self, width: int, height: int) -> "BeamConfigBuilder":
        self._fields["width"] = width
        self._fields["height"] = height
        return self

    def mode(self, mode) -> "BeamConfigBuilder":
        self._fields["mode"] = AnimationMode.parse(mode)
        return self

    def stretch_durations(self, v_duration: float, h_duration: float) -> "BeamConfigBuilder":
        self._fields["v_stretch_duration"] = v_duration
        self._fields["h_stretch_duration"] = h_duration
        return self

    def build_config(self) -> BeamConfig:
        return BeamConfig(**self._fields).validate()

    def build(self):
        """Build a renderer for the assembled configuration."""
        from electronbeam.core.renderer import ElectronBeamRenderer

        return ElectronBeamRenderer(self.build_config())
