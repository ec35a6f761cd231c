"""
Configuration Manager

Builds the effective ``AppConfig`` from defaults, a YAML/JSON file,
``ARCSITE_`` environment variables and CLI options, then overlays the
site metadata kept in ``<app_dir>/site.config``.
"""

import os
import json
import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Callable, Optional, Union, List, Tuple
from pydantic import ValidationError

from arcsite.content.frontmatter import FrontmatterParser
from arcsite.core.config.models import AppConfig, SiteConfig
from arcsite.core.exceptions import ConfigurationError, ErrorCode


SITE_CONFIG_FILE = "site.config"
DEFAULT_CONFIG_FILES = ("arcsite.yaml", "arcsite.yml", ".arcsite.yaml", ".arcsite.yml")


def _parse_bool(value: Union[str, bool]) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


def _parse_list(value: Union[str, List[str]]) -> List[str]:
    """Comma separated string to list; lists pass through."""
    if isinstance(value, list):
        return value
    return [part.strip() for part in str(value).split(',') if part.strip()]


# Environment variable suffix -> (config path, parser)
ENV_SETTINGS: Dict[str, Tuple[Tuple[str, ...], Callable[[str], Any]]] = {
    "APP_DIR": (("build", "app_dir"), str),
    "SITE_DIR": (("build", "site_dir"), str),
    "MAX_INCLUDE_DEPTH": (("build", "max_include_depth"), int),
    "MARKDOWN_EXTENSIONS": (("build", "markdown_extensions"), _parse_list),
    "GENERATE_RSS": (("build", "generate_rss"), _parse_bool),
    "SITE_URL": (("site", "url"), str),
    "SITE_TITLE": (("site", "title"), str),
    "WATCH_EXTENSIONS": (("watch", "extensions"), _parse_list),
    "WATCH_DEBOUNCE": (("watch", "debounce"), float),
    "VERBOSE": (("verbose",), _parse_bool),
    "DEBUG": (("debug",), _parse_bool),
}

# CLI option name -> config path
CLI_SETTINGS: Dict[str, Tuple[str, ...]] = {
    'app_dir': ("build", "app_dir"),
    'site_dir': ("build", "site_dir"),
    'max_include_depth': ("build", "max_include_depth"),
    'rss': ("build", "generate_rss"),
    'debounce': ("watch", "debounce"),
    'verbose': ("verbose",),
    'debug': ("debug",),
}


class ConfigManager:
    """
    Loads and validates arcsite configuration.

    Later sources win: defaults, then the config file, then environment
    variables, then CLI options. ``site.config`` in the application
    directory overrides the ``site`` section last.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Args:
            config_file: Explicit configuration file; when omitted the
                working directory is searched for ``arcsite.yaml`` and friends
        """
        self.config_file = Path(config_file) if config_file else None
        self.logger = logging.getLogger(__name__)
        self._config: Optional[AppConfig] = None
        self._site_config_found = False
        self._search_paths = [Path.cwd() / name for name in DEFAULT_CONFIG_FILES]

    def load_config(
        self,
        cli_args: Optional[Dict[str, Any]] = None,
        env_prefix: str = "ARCSITE_"
    ) -> AppConfig:
        """
        Load the effective configuration.

        Args:
            cli_args: Option values from the command line; ``None`` values
                are treated as not given
            env_prefix: Prefix of the environment variables to read

        Returns:
            Validated AppConfig

        Raises:
            ConfigurationError: If any source is unreadable or invalid
        """
        data = self._load_config_file() or {}
        data = self._deep_merge(data, self._load_env_config(env_prefix))
        data = self._deep_merge(data, self._normalize_cli_args(cli_args or {}))

        try:
            config = AppConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e}",
                error_code=ErrorCode.CONFIG_SCHEMA_VALIDATION,
                cause=e
            )

        site_values, self._site_config_found = self.load_site_config(config.build.app_dir)
        if site_values:
            try:
                config.site = SiteConfig(**{**config.site.model_dump(), **site_values})
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid values in {SITE_CONFIG_FILE}: {e}",
                    error_code=ErrorCode.CONFIG_INVALID_VALUE,
                    config_key=SITE_CONFIG_FILE,
                    cause=e
                )

        self._config = config
        return config

    def load_site_config(self, app_dir: Union[str, Path]) -> Tuple[Dict[str, str], bool]:
        """
        Read ``site.config`` from the application directory.

        The file uses the same ``---`` delimited ``key: value`` format as
        document frontmatter.

        Returns:
            The parsed key/value pairs and whether the file exists
        """
        path = Path(app_dir) / SITE_CONFIG_FILE
        if not path.is_file():
            return {}, False

        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to read {path}: {e}", cause=e)

        parser = FrontmatterParser()
        values = parser.parse(parser.extract_frontmatter(text))
        self.logger.info(f"Loaded site configuration from: {path}")
        return values, True

    def _find_config_file(self) -> Optional[Path]:
        if self.config_file:
            if not self.config_file.is_file():
                raise ConfigurationError(
                    f"Configuration file not found: {self.config_file}",
                    error_code=ErrorCode.CONFIG_FILE_NOT_FOUND
                )
            return self.config_file
        return next((p for p in self._search_paths if p.is_file()), None)

    def _load_config_file(self) -> Optional[Dict[str, Any]]:
        path = self._find_config_file()
        if path is None:
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f) if path.suffix.lower() == '.json' else yaml.safe_load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load config file {path}: {e}", cause=e)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        self.logger.debug(f"Loaded configuration file {path}")
        return data

    def _load_env_config(self, prefix: str) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for suffix, (key_path, parser) in ENV_SETTINGS.items():
            env_var = prefix + suffix
            raw = os.environ.get(env_var)
            if raw is None:
                continue
            try:
                self._set_path(values, key_path, parser(raw))
            except (ValueError, TypeError) as e:
                raise ConfigurationError(
                    f"Invalid value for {env_var}: {raw} ({e})",
                    error_code=ErrorCode.CONFIG_INVALID_VALUE,
                    config_key=env_var,
                    config_value=raw
                )
        return values

    def _normalize_cli_args(self, cli_args: Dict[str, Any]) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for option, value in cli_args.items():
            key_path = CLI_SETTINGS.get(option)
            if key_path and value is not None:
                self._set_path(values, key_path, value)
        return values

    @staticmethod
    def _set_path(target: Dict[str, Any], key_path: Tuple[str, ...], value: Any) -> None:
        *sections, key = key_path
        for section in sections:
            target = target.setdefault(section, {})
        target[key] = value

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``override`` into a copy of ``base``, recursing into sections."""
        merged = dict(base)
        for key, value in override.items():
            if isinstance(merged.get(key), dict) and isinstance(value, dict):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def validate_config(self, config: Optional[AppConfig] = None) -> List[str]:
        """
        Check the configuration against the file system.

        Args:
            config: Configuration to check; defaults to the last one loaded

        Returns:
            Human-readable warnings, empty when everything looks right
        """
        config = config or self._config
        if config is None:
            return ["No configuration loaded"]

        warnings = []
        if not config.build.app_dir.is_dir():
            warnings.append(f"Application directory does not exist: {config.build.app_dir}")
        elif not config.templates_dir.is_dir():
            warnings.append(f"Templates directory does not exist: {config.templates_dir}")

        if config.build.site_dir.resolve() == config.build.app_dir.resolve():
            warnings.append("Site directory is the same as the application directory")

        return warnings

    @property
    def site_config_found(self) -> bool:
        """Whether ``site.config`` was present during the last load."""
        return self._site_config_found

    @property
    def config(self) -> Optional[AppConfig]:
        return self._config
