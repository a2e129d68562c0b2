from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sitemap_generator.core.config import SitemapGeneratorConfig
from sitemap_generator.core.exceptions import ConfigurationError

CONFIG_FILENAME = "_config.yml"
ENV_PREFIX = "SITEMAP_GENERATOR_"

# Top-level keys of a Jekyll _config.yml that belong to the ``site`` section
SITE_KEYS = ("url", "source", "destination", "permalink")


class ConfigLoader:
    """Loads and validates the generator configuration.

    Reads the site's ``_config.yml`` and works with SitemapGeneratorConfig
    (BaseSettings) so environment variables keep precedence over the file.
    """

    def __init__(self, site_root: Path | None = None):
        """Initialize config loader.

        Args:
            site_root: Directory holding ``_config.yml``. If None, uses current working directory.

        """
        self.site_root = site_root if site_root is not None else Path.cwd()

    def load(self) -> SitemapGeneratorConfig:
        """Loads configuration with environment-variable precedence.

        Priority (highest to lowest):
        1. Environment variables (SITEMAP_GENERATOR_SECTION__KEY)
        2. Config file (_config.yml relative to site_root)
        3. Defaults
        """
        file_config = self._normalized_config(self._load_from_file())
        try:
            merged = self._merge_config(
                base=SitemapGeneratorConfig().model_dump(mode="json"),
                override=file_config,
                env_override_paths=self._collect_env_override_paths(),
            )
            return SitemapGeneratorConfig.model_validate(merged)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _normalized_config(self, config_data: dict[str, Any]) -> dict[str, Any]:
        """Reshape a Jekyll-style config into the generator's sections."""
        normalized: dict[str, Any] = {}

        site = {key: config_data[key] for key in SITE_KEYS if config_data.get(key) is not None}
        site["site_root"] = self.site_root
        normalized["site"] = site

        for section in ("sitemap", "logging"):
            value = config_data.get(section)
            if value is None:
                continue
            if not isinstance(value, dict):
                msg = f"Configuration '{section}' must be a dictionary, got {type(value).__name__}"
                raise ConfigurationError(msg)
            normalized[section] = deepcopy(value)

        return normalized

    def _collect_env_override_paths(self) -> set[tuple[str, ...]]:
        """Return the set of config paths defined via environment variables."""
        env_paths: set[tuple[str, ...]] = set()

        for key in os.environ:
            if not key.startswith(ENV_PREFIX):
                continue
            parts = [part.lower() for part in key[len(ENV_PREFIX) :].split("__") if part]
            if parts:
                env_paths.add(tuple(parts))

        return env_paths

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
        env_override_paths: set[tuple[str, ...]],
        current_path: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        """Merge override into base, skipping keys provided via env vars."""
        merged = deepcopy(base)

        for key, value in override.items():
            path = current_path + (str(key).lower(),)
            if path in env_override_paths:
                continue

            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = self._merge_config(merged[key], value, env_override_paths, path)
            else:
                merged[key] = value

        return merged

    def _load_from_file(self) -> dict[str, Any]:
        """Loads configuration from _config.yml."""
        config_path = self.site_root / CONFIG_FILENAME
        if not config_path.exists():
            return {}

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            msg = f"Configuration root must be a mapping (dictionary), got {type(data).__name__}"
            raise ConfigurationError(msg)
        return data
