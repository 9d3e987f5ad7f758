"""Encoding of figures to files through matplotlib.

Two export variants exist, each with a fixed format whitelist:

* :class:`RasterCapture` grabs whatever figure is active in pyplot (the
  "device") and sizes it in whole pixels.
* :class:`VectorExport` writes an explicit :class:`~matplotlib.figure.Figure`
  and accepts physical length units directly.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Dict, FrozenSet, Iterator, Optional, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from geckoutils.core.errors import (
    FilesystemError,
    NoActiveSurfaceError,
    NoPlotAvailableError,
    UnsupportedFormatError,
)
from geckoutils.utils.units import normalise_units, to_inches, to_pixels

logger = logging.getLogger(__name__)

RASTER_CAPTURE_FORMATS: FrozenSet[str] = frozenset({"png", "pdf"})
VECTOR_EXPORT_FORMATS: FrozenSet[str] = frozenset(
    {"eps", "ps", "pdf", "pgf", "png", "jpeg", "jpg", "tiff", "tif", "svg"}
)


def check_format(file_type: str, allowed: FrozenSet[str], variant: str) -> str:
    ft = str(file_type).strip().lstrip(".").lower()
    if ft not in allowed:
        raise UnsupportedFormatError(
            f"Unsupported file type '{file_type}' for {variant}; use one of {sorted(allowed)}"
        )
    return ft


@contextmanager
def _temporary_size(fig: Figure, size_in: Tuple[Optional[float], Optional[float]]) -> Iterator[Figure]:
    original = tuple(fig.get_size_inches())
    width, height = size_in
    if width is not None or height is not None:
        fig.set_size_inches(width if width is not None else original[0],
                            height if height is not None else original[1])
    try:
        yield fig
    finally:
        fig.set_size_inches(*original)


class MatplotlibBackend:
    """Thin adapter over matplotlib used by the export variants."""

    def export(self, figure: Figure, path: Path, file_type: str,
               width: Optional[float] = None, height: Optional[float] = None,
               units: str = "in", dpi: float = 300, **options: Any) -> Path:
        size = (to_inches(width, units, dpi), to_inches(height, units, dpi))
        with _temporary_size(figure, size):
            figure.savefig(str(path), format=file_type, dpi=dpi, **options)
        return Path(path)

    def active_figure(self) -> Figure:
        if not plt.get_fignums():
            raise NoActiveSurfaceError("No active matplotlib figure to capture; draw a plot first or pass a figure")
        return plt.gcf()

    def capture_active(self, path: Path, file_type: str,
                       width_px: Optional[int] = None, height_px: Optional[int] = None,
                       dpi: float = 300, **options: Any) -> Path:
        fig = self.active_figure()
        size = (None if width_px is None else width_px / dpi,
                None if height_px is None else height_px / dpi)
        with _temporary_size(fig, size):
            fig.savefig(str(path), format=file_type, dpi=dpi, **options)
        return Path(path)


def _run(action, destination: Path):
    try:
        return action()
    except OSError as e:
        raise FilesystemError(f"Failed to write figure to {destination}: {e}") from e


@dataclass(frozen=True)
class RasterCapture:
    width: Optional[float] = None
    height: Optional[float] = None
    units: str = "in"
    dpi: float = 300
    options: Dict[str, Any] = field(default_factory=dict)

    FORMATS: ClassVar[FrozenSet[str]] = RASTER_CAPTURE_FORMATS
    NAME: ClassVar[str] = "capture from the active figure"

    def pixel_size(self) -> Tuple[Optional[int], Optional[int]]:
        return to_pixels(self.width, self.units, self.dpi), to_pixels(self.height, self.units, self.dpi)

    def check(self, file_type: str, backend: Optional[MatplotlibBackend] = None) -> str:
        ft = check_format(file_type, self.FORMATS, self.NAME)
        (backend or MatplotlibBackend()).active_figure()
        return ft

    def write(self, destination: Path, file_type: str, backend: Optional[MatplotlibBackend] = None) -> Path:
        backend = backend or MatplotlibBackend()
        ft = self.check(file_type, backend)
        width_px, height_px = self.pixel_size()
        return _run(lambda: backend.capture_active(destination, ft, width_px, height_px, dpi=self.dpi, **self.options),
                    destination)


@dataclass(frozen=True)
class VectorExport:
    figure: Optional[Figure] = None
    width: Optional[float] = None
    height: Optional[float] = None
    units: str = "in"
    dpi: float = 300
    options: Dict[str, Any] = field(default_factory=dict)

    FORMATS: ClassVar[FrozenSet[str]] = VECTOR_EXPORT_FORMATS
    NAME: ClassVar[str] = "figure export"

    def check(self, file_type: str, backend: Optional[MatplotlibBackend] = None) -> str:
        ft = check_format(file_type, self.FORMATS, self.NAME)
        if self.figure is None:
            raise NoPlotAvailableError(
                "No figure supplied; pass the Figure to save or capture the active figure instead"
            )
        return ft

    def write(self, destination: Path, file_type: str, backend: Optional[MatplotlibBackend] = None) -> Path:
        ft = self.check(file_type, backend)
        backend = backend or MatplotlibBackend()
        return _run(lambda: backend.export(self.figure, destination, ft, self.width, self.height,
                                           units=normalise_units(self.units), dpi=self.dpi, **self.options),
                    destination)


ExportVariant = Union[RasterCapture, VectorExport]


def make_variant(figure: Optional[Figure] = None, capture_from_active_surface: bool = False,
                 width: Optional[float] = None, height: Optional[float] = None,
                 units: str = "in", dpi: float = 300, **options: Any) -> ExportVariant:
    units = normalise_units(units)
    if figure is not None and not isinstance(figure, Figure) and isinstance(getattr(figure, "figure", None), Figure):
        # Axes and seaborn grids carry their parent figure
        figure = figure.figure
    if capture_from_active_surface:
        return RasterCapture(width=width, height=height, units=units, dpi=dpi, options=options)
    return VectorExport(figure=figure, width=width, height=height, units=units, dpi=dpi, options=options)


def write_figure(destination: Union[str, Path], figure: Optional[Figure] = None,
                 capture_from_active_surface: bool = False, file_type: str = "png",
                 width: Optional[float] = None, height: Optional[float] = None,
                 units: str = "in", dpi: float = 300,
                 backend: Optional[MatplotlibBackend] = None, **options: Any) -> Path:
    """Encode a figure to `destination` and return the path."""
    variant = make_variant(figure, capture_from_active_surface, width, height, units, dpi, **options)
    path = variant.write(Path(destination), file_type, backend=backend)
    logger.info("Saved figure: %s", str(path))
    return path
