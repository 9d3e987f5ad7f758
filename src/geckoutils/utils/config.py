"""Centralized helper for loading `gecko.yaml` and deriving figure/theme settings.

The YAML file may hold a ``FIGURES`` and a ``THEME`` section. Any value can be
overridden from the environment with ``GECKO_<SECTION>_<KEY>`` variables, e.g.
``GECKO_FIGURES_SAVE_DIR=figures``. Missing files yield the built-in defaults.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from geckoutils.core.config import FigureSaveConfig, ThemeConfig

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path("gecko.yaml")
ENV_PREFIX = "GECKO_"


def load_config(path: str | Path = DEFAULT_PATH) -> Dict[str, Any]:
    """Load YAML config from the provided file path and return a dict.

    Falls back to an empty dict on a missing file or a non-mapping document.
    Parse errors propagate so that a broken config is not silently ignored.
    """
    p = Path(path)
    if not p.exists():
        logger.debug("Config file not found: %s", str(p))
        return {}
    with p.open("r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh) or {}
    return cfg if isinstance(cfg, dict) else {}


def _parse_env_value(v: str):
    if not isinstance(v, str):
        return v
    s = v.strip()
    if (s.startswith("[") and s.endswith("]")) or (s.startswith("{") and s.endswith("}")):
        try:
            return json.loads(s)
        except ValueError:
            pass
    low = s.lower()
    if low in {"true", "yes"}:
        return True
    if low in {"false", "no"}:
        return False
    try:
        if "." in s:
            return float(s)
        return int(s)
    except ValueError:
        pass
    return s


def override_config_from_env(cfg: dict, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None) -> dict:
    """Apply ``<prefix><SECTION>_<KEY>`` environment variables onto `cfg`.

    Section names are matched case-insensitively against existing top-level
    keys (longest first); keys below a section are lower-cased.
    """
    if not isinstance(cfg, dict):
        return cfg
    environ = os.environ if environ is None else environ
    cfg_top_keys = {"".join(ch if ch.isalnum() else "_" for ch in k).upper(): k for k in cfg.keys() if isinstance(k, str)}
    for known in ("FIGURES", "THEME"):
        cfg_top_keys.setdefault(known, known)
    pat = re.compile(rf"^{re.escape(prefix)}(?P<rest>.+)$")
    for k, v in environ.items():
        m = pat.match(k)
        if not m:
            continue
        rest_upper = m.group("rest").upper()
        matched = None
        for top in sorted(cfg_top_keys.keys(), key=lambda x: -len(x)):
            if rest_upper.startswith(top + "_"):
                matched = top
                break
        if matched is None:
            continue
        top_key = cfg_top_keys[matched]
        name = rest_upper[len(matched):].lstrip("_").lower()
        if not name:
            continue
        if top_key not in cfg or not isinstance(cfg[top_key], dict):
            cfg[top_key] = {}
        cfg[top_key][name] = _parse_env_value(v)
        logger.debug("Config override from %s: %s.%s", k, top_key, name)
    return cfg


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    for key, value in cfg.items():
        if isinstance(key, str) and key.upper() == name and isinstance(value, dict):
            return {str(k).lower(): v for k, v in value.items()}
    return {}


def load_figure_config(path: str | Path = DEFAULT_PATH, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None) -> FigureSaveConfig:
    """Return the figure-saving defaults for this project."""
    cfg = override_config_from_env(load_config(path), prefix=prefix, environ=environ)
    return FigureSaveConfig(**_section(cfg, "FIGURES"))


def load_theme_config(path: str | Path = DEFAULT_PATH, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None) -> ThemeConfig:
    cfg = override_config_from_env(load_config(path), prefix=prefix, environ=environ)
    return ThemeConfig(**_section(cfg, "THEME"))
