"""Rendering engine: easing, canvas helpers, effects and the frame renderer."""

from electronbeam.core.config import AnimationMode, BeamConfig, BeamConfigBuilder
from electronbeam.core.easing import scurve, sigmoid
from electronbeam.core.errors import (
    ConfigError,
    ElectronBeamError,
    EncoderError,
    ImageError,
    InvalidLevel,
    InvalidMode,
    NotPrepared,
)
from electronbeam.core.renderer import ElectronBeamRenderer, frame_levels, render_animation
