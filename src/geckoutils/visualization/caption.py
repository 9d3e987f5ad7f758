"""Caption annotations recording when and by which script a figure was made."""
from __future__ import annotations

import logging
import platform
import warnings
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from matplotlib.figure import Figure

from geckoutils.utils.script_path import get_current_script_path
from .styles import GeckoTheme

logger = logging.getLogger(__name__)

CAPTION_GID = "gecko-figure-caption"
UNKNOWN_SCRIPT = "Unknown script"


@dataclass(frozen=True)
class FigureInfo:
    caption_text: str
    fontsize: float = 9.0

    def add_to(self, fig: Figure) -> Figure:
        """Place the caption at the bottom right of `fig` unless it already has one."""
        if get_caption(fig) is not None:
            warnings.warn("The figure already has a caption. `figure_info()` did not overwrite it.", UserWarning, stacklevel=2)
            return fig
        fig.text(0.99, 0.01, self.caption_text, ha="right", va="bottom", fontsize=self.fontsize, gid=CAPTION_GID)
        return fig


def get_caption(fig: Figure) -> Optional[str]:
    for text in fig.texts:
        if text.get_gid() == CAPTION_GID:
            return text.get_text()
    return None


def _script_name(script_path_fn: Callable[[], Optional[str]]) -> str:
    try:
        path = script_path_fn()
    except RuntimeError:
        path = None
    return Path(path).name if path else UNKNOWN_SCRIPT


def figure_info(custom_text: Optional[str] = None,
                include_python_version: bool = True,
                datetime_format: str = "%d.%m.%Y %X",
                fontsize: Optional[float] = None,
                now: Optional[datetime] = None,
                script_path_fn: Optional[Callable[[], Optional[str]]] = None,
                theme: Optional[GeckoTheme] = None) -> FigureInfo:
    """Build a caption with optional custom text, Python version, creation time and script name.

    The font size defaults to the caption size of `theme` (the gecko default
    when no theme is given).
    """
    if fontsize is None:
        fontsize = (theme or GeckoTheme()).caption_size
    current = (now or datetime.now()).strftime(datetime_format)
    script_name = _script_name(script_path_fn or get_current_script_path)
    lines = []
    if custom_text is not None:
        lines.append(custom_text)
    if include_python_version:
        lines.append(f"Python Version: {platform.python_version()}")
    lines.append(f"Figure created on: {current}")
    lines.append(f"Script: {script_name}")
    return FigureInfo(caption_text="\n".join(lines), fontsize=fontsize)


def add_figure_info(fig: Figure, info: Optional[FigureInfo] = None, **kwargs) -> Figure:
    """Shortcut for ``figure_info(**kwargs).add_to(fig)``."""
    return (info or figure_info(**kwargs)).add_to(fig)
