"""geckoutils public API."""

from .core.config import FigureSaveConfig, ThemeConfig
from .core.errors import (
    GeckoUtilsError,
    ValidationError,
    UnsupportedFormatError,
    NoPlotAvailableError,
    NoActiveSurfaceError,
    FilesystemError,
    UnknownColumnWarning,
)
from .metadata import MISSING, get_metadata, set_metadata, parse_metadata, metadata_fields
from .visualization import (
    render_summary,
    show_meta_data,
    render_interactive_view,
    resolve_destination,
    ensure_directory,
    write_figure,
    FigureWriter,
    save_plot_with_metadata,
    figure_info,
    add_figure_info,
    GeckoTheme,
    theme_gecko,
)
from .utils.config import load_figure_config, load_theme_config
from .utils.data_info import get_data_info
from .utils.script_path import get_current_script_path

__version__ = "0.1.0"

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
    "MISSING",
    "get_metadata",
    "set_metadata",
    "parse_metadata",
    "metadata_fields",
    "render_summary",
    "show_meta_data",
    "render_interactive_view",
    "resolve_destination",
    "ensure_directory",
    "write_figure",
    "FigureWriter",
    "save_plot_with_metadata",
    "figure_info",
    "add_figure_info",
    "GeckoTheme",
    "theme_gecko",
    "load_figure_config",
    "load_theme_config",
    "get_data_info",
    "get_current_script_path",
]
