"""
ElectronBeam: CRT power-on / power-off animations from still images.
"""

from electronbeam.core import (
    AnimationMode,
    BeamConfig,
    BeamConfigBuilder,
    ElectronBeamError,
    ElectronBeamRenderer,
    ImageError,
    InvalidLevel,
    InvalidMode,
    NotPrepared,
    frame_levels,
    render_animation,
    scurve,
)

__version__ = "0.1.0"
