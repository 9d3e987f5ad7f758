from __future__ import annotations


class GeckoUtilsError(Exception):
    """Base class for errors raised by geckoutils."""


class ValidationError(GeckoUtilsError, ValueError):
    """Malformed metadata input or an invalid name component."""


class UnsupportedFormatError(GeckoUtilsError, ValueError):
    """Requested file type is not valid for the chosen export variant."""


class NoPlotAvailableError(GeckoUtilsError, RuntimeError):
    """No figure handle was supplied for an export."""


class NoActiveSurfaceError(GeckoUtilsError, RuntimeError):
    """Capture was requested but no matplotlib figure is open."""


class FilesystemError(GeckoUtilsError, OSError):
    """Directory creation, rename or file write failed."""


class UnknownColumnWarning(UserWarning):
    """Metadata referenced a column that the DataFrame does not have."""
