from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def _main_module_file() -> Optional[Path]:
    main = sys.modules.get("__main__")
    candidate = getattr(main, "__file__", None)
    if candidate:
        p = Path(candidate)
        if p.is_file():
            return p
    argv0 = sys.argv[0] if sys.argv else ""
    # interactive interpreters report "" or "-c"
    if argv0 and argv0 not in {"-c", "-m", "-"}:
        p = Path(argv0)
        if p.is_file():
            return p
    return None


def get_current_script_path(only_filename: bool = False, throw_error_if_missing: bool = True) -> Optional[str]:
    """Return the path (or just the file name) of the script currently running.

    Returns ``None`` when the path cannot be determined and
    `throw_error_if_missing` is false, e.g. in an interactive session.
    """
    path = _main_module_file()
    if path is None:
        if throw_error_if_missing:
            raise RuntimeError(
                "Unable to determine the script file path. This may happen in an interactive session "
                "or when running code that was not loaded from a file."
            )
        logger.debug("Script path not available")
        return None
    if only_filename:
        return path.name
    return str(path.resolve())


def get_script_stem(script_path_fn: Optional[Callable[[], Optional[str]]] = None) -> Optional[str]:
    """File name of the running script without extension, or ``None``.

    `script_path_fn` replaces the lookup of the script path; a
    ``RuntimeError`` from it counts as an unknown script.
    """
    fn = script_path_fn or (lambda: get_current_script_path(throw_error_if_missing=False))
    try:
        path = fn()
    except RuntimeError:
        path = None
    if not path:
        return None
    return Path(path).stem
