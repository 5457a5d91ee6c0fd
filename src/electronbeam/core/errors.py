"""
Exceptions raised by the electron beam engine and its collaborators.
"""


class ElectronBeamError(Exception):
    """Base class for all electron beam errors."""


class InvalidLevel(ElectronBeamError, ValueError):
    """Animation level outside [0.0, 1.0]."""

    def __init__(self, level: float):
        self.level = level
        super().__init__(
            f"Invalid level value: {level} (must be between 0.0 and 1.0)"
        )


class NotPrepared(ElectronBeamError):
    """A source raster is required but none has been prepared."""

    def __init__(self, message: str = "Animation not prepared"):
        super().__init__(message)


class InvalidMode(ElectronBeamError, ValueError):
    """Unknown animation mode."""

    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"Invalid animation mode: {mode}")


class ConfigError(ElectronBeamError, ValueError):
    """Configuration values out of range."""


class ImageError(ElectronBeamError):
    """Decoding or resampling a raster failed."""


class EncoderError(ElectronBeamError, RuntimeError):
    """Writing an animation to disk failed."""
