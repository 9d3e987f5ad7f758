from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

from matplotlib.figure import Figure

from geckoutils.core.config import FigureSaveConfig
from .export import MatplotlibBackend, make_variant
from .io import PrefixPolicy, normalise_file_type, resolve_destination

logger = logging.getLogger(__name__)


class FigureWriter:
    """Save figures under names derived from script, plot name and date.

    Every setting resolves as: explicit argument, then the injected
    :class:`FigureSaveConfig`, then the built-in default.

    With ``preserve_latest=True`` the newest version is kept as
    ``<save_dir>/latest/<name>.<ext>`` and the version it replaces is moved to
    ``<save_dir>/archive/<name>_<timestamp>.<ext>``, at most once per
    timestamp. Steps are not transactional: a failure after the archive move
    leaves the archived file in place. Two processes saving the same plot
    name at the same time can both skip archiving and overwrite each other;
    serialize such callers.
    """

    def __init__(self, config: Optional[FigureSaveConfig] = None,
                 backend: Optional[MatplotlibBackend] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 script_path_fn: Optional[Callable[[], Optional[str]]] = None) -> None:
        self.config = config or FigureSaveConfig()
        self.backend = backend or MatplotlibBackend()
        self._clock = clock or datetime.now
        self._script_path_fn = script_path_fn

    def save(self, plot_name: str, figure: Optional[Figure] = None, *,
             save_dir: Optional[Union[str, Path]] = None,
             file_type: Optional[str] = None,
             prefix: PrefixPolicy = True,
             timestamp_format: Optional[str] = None,
             preserve_latest: bool = False,
             latest_subdir: Optional[str] = None,
             archive_subdir: Optional[str] = None,
             use_device: bool = False,
             width: Optional[float] = None,
             height: Optional[float] = None,
             units: Optional[str] = None,
             dpi: Optional[float] = None,
             **options: Any) -> Path:
        """Write `figure` (or the active figure when `use_device`) and return its path.

        Extra keyword arguments go to ``Figure.savefig``.
        """
        cfg = self.config
        save_dir = cfg.save_dir if save_dir is None else save_dir
        file_type = normalise_file_type(cfg.file_type if file_type is None else file_type)
        timestamp_format = timestamp_format or cfg.timestamp_format
        latest_subdir = latest_subdir or cfg.latest_subdir
        archive_subdir = archive_subdir or cfg.archive_subdir
        units = units or cfg.units
        dpi = cfg.dpi if dpi is None else dpi
        now = self._clock()

        variant = make_variant(figure, use_device, width, height, units, dpi, **options)
        # fail on format or missing figure before anything touches the filesystem
        variant.check(file_type, self.backend)
        destination = resolve_destination(
            plot_name,
            save_dir=save_dir,
            prefix=prefix,
            timestamp_format=timestamp_format,
            preserve_latest=preserve_latest,
            latest_subdir=latest_subdir,
            archive_subdir=archive_subdir,
            file_type=file_type,
            now=now,
            script_path_fn=self._script_path_fn,
        )
        logger.debug("%s: destination ready at %s", plot_name, str(destination))

        path = variant.write(destination, file_type, backend=self.backend)
        logger.debug("%s: WRITTEN", plot_name)
        logger.info("Saved figure: %s", str(path))
        return path


def save_plot_with_metadata(plot_name: str, plot: Optional[Figure] = None,
                            config: Optional[FigureSaveConfig] = None, **kwargs: Any) -> Path:
    """Save `plot` with script name, plot name and date in the filename.

    See :meth:`FigureWriter.save` for the keyword arguments.
    """
    return FigureWriter(config=config).save(plot_name, plot, **kwargs)
