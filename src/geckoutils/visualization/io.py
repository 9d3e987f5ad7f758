import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union
import logging

from geckoutils.core.errors import FilesystemError, ValidationError
from geckoutils.utils.script_path import get_script_stem

logger = logging.getLogger(__name__)

PrefixPolicy = Union[bool, str, None]

_SEPARATORS = {"/", "\\"} | {s for s in (os.sep, os.altsep) if s}


def sanitize_name_component(value: str, what: str = "name") -> str:
    """Validate a user-supplied filename component.

    Rejects empty names, path separators, NUL bytes and '.'/'..' so that a
    plot name or prefix can never steer the output outside its directory.
    """
    if not isinstance(value, str):
        raise ValidationError(f"{what} must be a string, got {type(value).__name__}")
    stripped = value.strip()
    if not stripped:
        raise ValidationError(f"{what} must not be empty")
    if stripped in {".", ".."}:
        raise ValidationError(f"{what} '{value}' is not a valid file name")
    bad = sorted(ch for ch in _SEPARATORS | {"\x00"} if ch in value)
    if bad:
        raise ValidationError(f"{what} '{value}' contains forbidden character(s) {bad}")
    return stripped


def normalise_file_type(file_type: str) -> str:
    ft = str(file_type).strip().lstrip(".").lower()
    if not ft:
        raise ValidationError("file_type must not be empty")
    return sanitize_name_component(ft, "file_type")


def ensure_directory(path: Union[str, Path]) -> Path:
    """Create `path` and any missing parents. Idempotent."""
    p = Path(path)
    if p.exists() and not p.is_dir():
        raise FilesystemError(f"Cannot create directory {p}: a file with that name exists")
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Failed to create directory {p}: {e}") from e
    return p


def resolve_prefix(prefix: PrefixPolicy, script_path_fn: Optional[Callable[[], Optional[str]]] = None) -> Optional[str]:
    """Turn a prefix policy into the leading filename segment (or None).

    True derives the prefix from the running script and silently drops it
    when the script is unknown; a string is used verbatim; False/None disable it.
    """
    if prefix is None or prefix is False:
        return None
    if prefix is True:
        stem = get_script_stem(script_path_fn)
        if not stem:
            logger.debug("Script name unavailable; saving without prefix")
            return None
        return sanitize_name_component(stem, "prefix")
    if isinstance(prefix, str):
        return sanitize_name_component(prefix, "prefix")
    raise ValidationError(f"prefix must be True, False, None or a string, got {type(prefix).__name__}")


def compose_base_name(prefix: Optional[str], plot_name: str) -> str:
    plot_name = sanitize_name_component(plot_name, "plot_name")
    if prefix:
        return f"{prefix}_{plot_name}"
    return plot_name


def build_filename(base: str, file_type: str, timestamp: Optional[str] = None) -> str:
    if timestamp:
        return f"{base}_{sanitize_name_component(timestamp, 'timestamp')}.{file_type}"
    return f"{base}.{file_type}"


def rotate_latest(latest_file: Path, archive_dir: Path, timestamp: str) -> Optional[Path]:
    """Move `latest_file` into `archive_dir` with `timestamp` before the suffix.

    Nothing is moved when `latest_file` does not exist or when the archive
    entry for this timestamp already exists. Returns the archive path on a move.
    """
    latest_file = Path(latest_file)
    if not latest_file.exists():
        return None
    archive_file = Path(archive_dir) / build_filename(latest_file.stem, latest_file.suffix.lstrip("."), timestamp)
    if archive_file.exists():
        logger.debug("Archive entry %s exists; not archiving %s", str(archive_file), str(latest_file))
        return None
    try:
        os.replace(latest_file, archive_file)
    except OSError as e:
        raise FilesystemError(f"Failed to archive {latest_file} to {archive_file}: {e}") from e
    logger.info("Archived old version to: %s", str(archive_file))
    return archive_file


def compute_destination(plot_name: str,
                        save_dir: Union[str, Path] = "./",
                        prefix: PrefixPolicy = True,
                        timestamp_format: str = "%y%m%d",
                        preserve_latest: bool = False,
                        latest_subdir: str = "latest",
                        file_type: str = "png",
                        now: Optional[datetime] = None,
                        script_path_fn: Optional[Callable[[], Optional[str]]] = None) -> Path:
    """Absolute output path for a plot. Touches nothing on disk."""
    file_type = normalise_file_type(file_type)
    base = compose_base_name(resolve_prefix(prefix, script_path_fn), plot_name)
    root = Path(save_dir).expanduser().resolve()
    if preserve_latest:
        return root / sanitize_name_component(latest_subdir, "latest_subdir") / build_filename(base, file_type)
    timestamp = (now or datetime.now()).strftime(timestamp_format)
    return root / build_filename(base, file_type, timestamp)


def resolve_destination(plot_name: str,
                        save_dir: Union[str, Path] = "./",
                        prefix: PrefixPolicy = True,
                        timestamp_format: str = "%y%m%d",
                        preserve_latest: bool = False,
                        latest_subdir: str = "latest",
                        archive_subdir: str = "archive",
                        file_type: str = "png",
                        now: Optional[datetime] = None,
                        script_path_fn: Optional[Callable[[], Optional[str]]] = None) -> Path:
    """
    Compute the absolute output path for a plot and prepare the directories.

    Layout under save_dir:
      <prefix>_<plot_name>_<timestamp>.<ext>          preserve_latest=False
      latest/<prefix>_<plot_name>.<ext>                preserve_latest=True
      archive/<prefix>_<plot_name>_<timestamp>.<ext>   rotated-out versions
    In preserve_latest mode an existing latest file is moved to the archive.
    """
    now = now or datetime.now()
    destination = compute_destination(
        plot_name,
        save_dir=save_dir,
        prefix=prefix,
        timestamp_format=timestamp_format,
        preserve_latest=preserve_latest,
        latest_subdir=latest_subdir,
        file_type=file_type,
        now=now,
        script_path_fn=script_path_fn,
    )
    root = ensure_directory(Path(save_dir).expanduser().resolve())
    if not preserve_latest:
        return destination

    ensure_directory(destination.parent)
    archive_dir = ensure_directory(root / sanitize_name_component(archive_subdir, "archive_subdir"))
    rotate_latest(destination, archive_dir, now.strftime(timestamp_format))
    return destination
