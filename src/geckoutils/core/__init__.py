"""Configuration models and the exception hierarchy."""

from .config import FigureSaveConfig, ThemeConfig
from .errors import (
    GeckoUtilsError,
    ValidationError,
    UnsupportedFormatError,
    NoPlotAvailableError,
    NoActiveSurfaceError,
    FilesystemError,
    UnknownColumnWarning,
)

__all__ = [
    "FigureSaveConfig",
    "ThemeConfig",
    "GeckoUtilsError",
    "ValidationError",
    "UnsupportedFormatError",
    "NoPlotAvailableError",
    "NoActiveSurfaceError",
    "FilesystemError",
    "UnknownColumnWarning",
]
