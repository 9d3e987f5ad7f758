from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import matplotlib as mpl
import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib import cycler

from geckoutils.core.config import ThemeConfig

FALLBACK_FONTS = ["DejaVu Sans", "sans-serif"]


@dataclass
class GeckoTheme:
    """
    Gecko look for matplotlib: a closed black frame, no grid lines,
    bold left-aligned titles, bold axis titles and visible minor ticks.

    Build the rcParams with :meth:`rc_params` for use in
    ``matplotlib.rc_context`` or set them globally with :meth:`apply`.
    """

    font_family: str = "Noto Sans"
    title_size: float = 20.0
    subtitle_size: float = 14.0
    caption_size: float = 9.0
    axis_title_size: float = 12.0
    axis_text_size: float = 11.0
    dpi: int = 300
    palette: str = "colorblind"
    tick_length: float = 5.0
    minor_tick_ratio: float = 0.6
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: ThemeConfig, **overrides: Any) -> "GeckoTheme":
        values = config.model_dump()
        values.update(overrides)
        return cls(**values)

    def font_stack(self) -> List[str]:
        return [self.font_family] + [f for f in FALLBACK_FONTS if f != self.font_family]

    def rc_params(self) -> Dict[str, Any]:
        colors = sns.color_palette(self.palette).as_hex()
        minor = self.tick_length * self.minor_tick_ratio
        params: Dict[str, Any] = {
            # typography
            "font.family": self.font_stack(),
            "font.size": self.axis_text_size,
            "axes.titlesize": self.title_size,
            "axes.titleweight": "bold",
            "axes.titlelocation": "left",
            "axes.titlepad": 8.0,
            "figure.titlesize": self.subtitle_size,
            "axes.labelsize": self.axis_title_size,
            "axes.labelweight": "bold",
            "xtick.labelsize": self.axis_text_size,
            "ytick.labelsize": self.axis_text_size,
            "legend.fontsize": self.axis_text_size,
            "legend.title_fontsize": self.axis_title_size,
            # linedraw frame without grid
            "axes.edgecolor": "black",
            "axes.linewidth": 1.0,
            "axes.facecolor": "white",
            "axes.grid": False,
            "axes.spines.top": True,
            "axes.spines.right": True,
            "axes.prop_cycle": cycler(color=colors),
            "figure.facecolor": "white",
            "figure.dpi": self.dpi,
            "savefig.dpi": self.dpi,
            # ticks
            "xtick.color": "black",
            "ytick.color": "black",
            "xtick.major.size": self.tick_length,
            "ytick.major.size": self.tick_length,
            "xtick.minor.size": minor,
            "ytick.minor.size": minor,
            "xtick.minor.visible": True,
            "ytick.minor.visible": True,
            "xtick.direction": "out",
            "ytick.direction": "out",
            "legend.frameon": False,
        }
        params.update(self.extra)
        return params

    def apply(self) -> None:
        """
        Apply this theme to matplotlib's global rcParams.
        """
        mpl.rcParams.update(self.rc_params())


def theme_gecko(font_family: str = "Noto Sans",
                title_size: float = 20.0,
                subtitle_size: float = 14.0,
                caption_size: float = 9.0,
                axis_title_size: float = 12.0,
                axis_text_size: float = 11.0,
                **kwargs: Any) -> Dict[str, Any]:
    """Return gecko rcParams, e.g. ``with plt.rc_context(theme_gecko()): ...``."""
    theme = GeckoTheme(
        font_family=font_family,
        title_size=title_size,
        subtitle_size=subtitle_size,
        caption_size=caption_size,
        axis_title_size=axis_title_size,
        axis_text_size=axis_text_size,
        **kwargs,
    )
    return theme.rc_params()


def set_plot_style(style_name: str = 'gecko', dpi: int = 300, palette: str = 'colorblind', theme: Optional[GeckoTheme] = None):
    # publication defaults: gecko theme on top of matplotlib's defaults
    mpl.rcdefaults()
    if style_name != 'gecko':
        plt.style.use(style_name)
        mpl.rcParams['figure.dpi'] = dpi
        return
    (theme or GeckoTheme(dpi=dpi, palette=palette)).apply()
