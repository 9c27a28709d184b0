"""Unified configuration loaded from .blogserve.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from blogserve.integrations.supabase import (
    DEFAULT_POSTS_TABLE,
    DEFAULT_TRANSLATIONS_TABLE,
    SupabaseConfig,
)
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".blogserve.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
    Path.home() / ".config" / "blogserve",
]

# Site locales; the first one is the source locale.
SITE_LOCALES = [
    "en", "tr", "es", "de", "fr", "it", "pt", "nl", "pl", "ru",
    "uk", "ar", "ja", "ko", "zh", "hi", "th", "vi", "id", "ms",
    "sv", "da", "fi", "no", "cs", "ro", "hu", "el", "he", "bn",
]


class SupabaseSectionConfig(BaseModel):
    """[supabase] section."""

    url: str = ""
    anon_key: str = ""
    timeout: float = 10.0
    posts_table: str = DEFAULT_POSTS_TABLE
    translations_table: str = DEFAULT_TRANSLATIONS_TABLE


class LocalesConfig(BaseModel):
    """[locales] section."""

    source: str = "en"
    supported: list[str] = Field(default_factory=lambda: list(SITE_LOCALES))

    @field_validator("source")
    @classmethod
    def _lower(cls, value: str) -> str:
        return value.strip().lower()

    def is_supported(self, locale: str) -> bool:
        return locale == self.source or locale in self.supported


class BlogServeConfig(BaseModel):
    """Top-level configuration for the blog service."""

    supabase: SupabaseSectionConfig = Field(default_factory=SupabaseSectionConfig)
    locales: LocalesConfig = Field(default_factory=LocalesConfig)

    def to_supabase_config(self) -> SupabaseConfig:
        """Convert to SupabaseConfig for the REST client."""
        return SupabaseConfig(
            url=self.supabase.url,
            anon_key=self.supabase.anon_key,
            timeout=self.supabase.timeout,
            posts_table=self.supabase.posts_table,
            translations_table=self.supabase.translations_table,
        )


def load_config(path: str | Path | None = None) -> BlogServeConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .blogserve.toml in CWD
    3. ~/.config/blogserve/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged BlogServeConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        global_config = Path.home() / ".config" / "blogserve" / "config.toml"
        if not data and global_config.exists():
            data = _load_toml(global_config)
            logger.info("Loaded config from %s", global_config)

    config = BlogServeConfig.model_validate(data) if data else BlogServeConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: BlogServeConfig, **cli_kwargs: object) -> BlogServeConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "supabase_url": ("supabase", "url"),
        "supabase_key": ("supabase", "anon_key"),
        "timeout": ("supabase", "timeout"),
        "source_locale": ("locales", "source"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = value

    return BlogServeConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: BlogServeConfig) -> BlogServeConfig:
    """Apply environment variable overrides to config.

    Listed in ascending priority: the frontend's ``NEXT_PUBLIC_`` names
    are read first so the plain names win when both are set.
    """
    data = config.model_dump()

    env_mapping: list[tuple[str, tuple[str, str]]] = [
        ("NEXT_PUBLIC_SUPABASE_URL", ("supabase", "url")),
        ("SUPABASE_URL", ("supabase", "url")),
        ("NEXT_PUBLIC_SUPABASE_ANON_KEY", ("supabase", "anon_key")),
        ("SUPABASE_ANON_KEY", ("supabase", "anon_key")),
        ("BLOGSERVE_POSTS_TABLE", ("supabase", "posts_table")),
        ("BLOGSERVE_TRANSLATIONS_TABLE", ("supabase", "translations_table")),
        ("BLOGSERVE_SOURCE_LOCALE", ("locales", "source")),
    ]

    for env_var, (section, field) in env_mapping:
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    timeout_raw = os.environ.get("BLOGSERVE_TIMEOUT")
    if timeout_raw is not None:
        try:
            data["supabase"]["timeout"] = float(timeout_raw)
        except ValueError:
            logger.warning("Ignoring invalid BLOGSERVE_TIMEOUT=%r", timeout_raw)

    return BlogServeConfig.model_validate(data)
