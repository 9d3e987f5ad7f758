"""
Visualization package for geckoutils
Expose helpers for theming, captions, metadata summaries and figure saving
"""
from .io import resolve_destination, compute_destination, ensure_directory, rotate_latest, sanitize_name_component
from .table_utils import render_summary, show_meta_data
from .viewer import render_interactive_view
from .export import RasterCapture, VectorExport, MatplotlibBackend, write_figure
from .writer import FigureWriter, save_plot_with_metadata
from .caption import FigureInfo, figure_info, add_figure_info
from .styles import GeckoTheme, theme_gecko, set_plot_style

__all__ = [
    "resolve_destination",
    "compute_destination",
    "ensure_directory",
    "rotate_latest",
    "sanitize_name_component",
    "render_summary",
    "show_meta_data",
    "render_interactive_view",
    "RasterCapture",
    "VectorExport",
    "MatplotlibBackend",
    "write_figure",
    "FigureWriter",
    "save_plot_with_metadata",
    "FigureInfo",
    "figure_info",
    "add_figure_info",
    "GeckoTheme",
    "theme_gecko",
    "set_plot_style",
]
