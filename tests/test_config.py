"""Unit tests for loading ``site.yaml``."""

from __future__ import annotations

from pathlib import Path

import pytest

from hukuk_blog.config import SiteConfig, SiteConfigError, TocConfig, load_site_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_load_site_config_reads_all_fields(tmp_path: Path) -> None:
    """Every documented key should be parsed into the dataclasses."""
    path = _write(
        tmp_path,
        """
site_name: Örnek Hukuk
database: var/posts.db
output_dir: dist/blog
pygments_style: friendly
toc:
  min_level: 1
  max_level: 3
  numbered: true
  max_depth: 2
        """,
    )
    config = load_site_config(path)
    assert config == SiteConfig(
        site_name="Örnek Hukuk",
        database=Path("var/posts.db"),
        output_dir=Path("dist/blog"),
        pygments_style="friendly",
        toc=TocConfig(min_level=1, max_level=3, numbered=True, max_depth=2),
    ), f"unexpected config {config!r}"


def test_missing_keys_fall_back_to_defaults(tmp_path: Path) -> None:
    """An empty document should yield the default configuration."""
    config = load_site_config(_write(tmp_path, "{}"))
    assert config == SiteConfig(), f"expected defaults, got {config!r}"


def test_missing_file_raises(tmp_path: Path) -> None:
    """A missing configuration file is reported as such."""
    with pytest.raises(FileNotFoundError, match="not found"):
        load_site_config(tmp_path / "absent.yaml")


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    """The top level must be a mapping."""
    with pytest.raises(TypeError, match="mapping"):
        load_site_config(_write(tmp_path, "- one\n- two"))


@pytest.mark.parametrize(
    "toc_block",
    [
        "toc:\n  min_level: 0",
        "toc:\n  max_level: 7",
        "toc:\n  min_level: 4\n  max_level: 2",
        "toc:\n  max_depth: yes",
        "toc: [2, 4]",
    ],
)
def test_invalid_toc_block_raises(tmp_path: Path, toc_block: str) -> None:
    """Out-of-range or malformed TOC settings are configuration errors."""
    with pytest.raises(SiteConfigError):
        load_site_config(_write(tmp_path, toc_block))
