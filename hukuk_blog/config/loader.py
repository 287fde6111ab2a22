"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import SiteConfig, SiteConfigError, TocConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _level(payload: typ.Mapping[str, typ.Any], key: str, default: int) -> int:
    """Return an integer heading level from ``payload`` within 1–6."""
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 6:
        msg = f"toc.{key} must be an integer between 1 and 6, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _build_toc_config(payload: object | None) -> TocConfig:
    """Build a TocConfig from the ``toc`` block, applying defaults."""
    base = TocConfig()
    if payload is None:
        return base
    if not isinstance(payload, dict):
        msg = "The 'toc' section must be a mapping."
        raise SiteConfigError(msg)
    toc = TocConfig(
        min_level=_level(payload, "min_level", base.min_level),
        max_level=_level(payload, "max_level", base.max_level),
        numbered=bool(payload.get("numbered", base.numbered)),
        max_depth=_level(payload, "max_depth", base.max_depth),
    )
    if toc.min_level > toc.max_level:
        msg = (
            f"toc.min_level ({toc.min_level}) cannot exceed "
            f"toc.max_level ({toc.max_level})."
        )
        raise SiteConfigError(msg)
    return toc


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the blog store and page build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration; keys missing from the file keep their defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the ``toc`` block holds invalid heading levels.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base = SiteConfig()
    database = _optional_str(raw.get("database"))
    output_dir = _optional_str(raw.get("output_dir"))
    return SiteConfig(
        site_name=_optional_str(raw.get("site_name")) or base.site_name,
        database=Path(database) if database else base.database,
        output_dir=Path(output_dir) if output_dir else base.output_dir,
        pygments_style=_optional_str(raw.get("pygments_style"))
        or base.pygments_style,
        toc=_build_toc_config(raw.get("toc")),
    )


__all__ = ["load_site_config"]
