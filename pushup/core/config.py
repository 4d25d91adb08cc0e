"""Configuration for PushUP.

Settings live in INI files read with configparser. Lookups walk the layers
from most to least specific: environment, repository, global.
"""

import io
import os
import logging
import configparser
from pathlib import Path
from typing import Optional, Dict, Iterator, Tuple
from pushup.core.errors import IoError
from pushup.utils.fs import write_atomic

logger = logging.getLogger(__name__)

ENV_PREFIX = 'PUSHUP'
DEFAULT_SECTION = 'core'
DEFAULT_LOG_LEVEL = 'WARNING'

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}


def split_key(key: str) -> Tuple[str, str]:
    """Split 'section.option' into its parts; a bare option lives in 'core'."""
    section, _, option = key.rpartition('.')
    return section or DEFAULT_SECTION, option


def env_name(section: str, option: str) -> str:
    """Environment variable overriding a key, e.g. PUSHUP_CORE_LOCK."""
    return f"{ENV_PREFIX}_{section.upper()}_{option.upper()}"


def _read_ini(path: Optional[Path]) -> configparser.ConfigParser:
    """
    Parse an INI file; a missing file gives an empty parser.

    Raises:
        IoError: If the file is not valid INI
    """
    parser = configparser.ConfigParser()
    if path is not None and path.exists():
        try:
            parser.read(path, encoding='utf-8')
        except (configparser.Error, UnicodeDecodeError) as e:
            raise IoError(f"Invalid config file {path}: {e}") from e
    return parser


class Config:
    """
    Layered PushUP settings.

    Files:
    - global:     ~/.pushupconfig
    - repository: .pushup/config

    Known keys:
    - core.lock       take the repository write lock (default: true)
    - log.level       CLI logging level (default: WARNING)
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.pushupconfig'

    def __init__(self, repo_config_path: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: The repository's config file, None outside a repository
            global_config_path: Override for the global config location
        """
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self.global_config_path = Path(global_config_path or self.GLOBAL_CONFIG_PATH)
        self._layers: Dict[str, configparser.ConfigParser] = {}

    def _layer(self, scope: str) -> configparser.ConfigParser:
        if scope not in self._layers:
            path = self.global_config_path if scope == 'global' else self.repo_config_path
            self._layers[scope] = _read_ini(path)
        return self._layers[scope]

    def _file_layers(self) -> Iterator[configparser.ConfigParser]:
        """File layers, most specific first."""
        if self.repo_config_path is not None:
            yield self._layer('repo')
        yield self._layer('global')

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look up a value.

        The environment variable PUSHUP_<SECTION>_<KEY> wins over the
        repository file, which wins over the global file.
        """
        value = os.environ.get(env_name(section, key))
        if value is not None:
            return value

        for layer in self._file_layers():
            if layer.has_option(section, key):
                return layer.get(section, key)
        return fallback

    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        """Boolean lookup; values that are neither true nor false give the fallback."""
        value = self.get(section, key)
        if value is None:
            return fallback

        value = value.strip().lower()
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        logger.debug("Ignoring non-boolean %s.%s=%r", section, key, value)
        return fallback

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Store a value in the repository file, or the global one.

        Raises:
            ValueError: If the repository file is asked for outside a repository
            IoError: If the file cannot be parsed or written
        """
        if global_config:
            scope, path = 'global', self.global_config_path
        elif self.repo_config_path is None:
            raise ValueError("No repository config path available")
        else:
            scope, path = 'repo', self.repo_config_path

        layer = self._layer(scope)
        if not layer.has_section(section):
            layer.add_section(section)
        layer.set(section, key, value)

        buffer = io.StringIO()
        layer.write(buffer)
        try:
            write_atomic(path, buffer.getvalue())
        except OSError as e:
            raise IoError(f"Cannot write config file {path}: {e}") from e
        logger.debug("Set %s.%s in %s", section, key, path)

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        All file settings by section.

        Global keys are suffixed with ' (global)' so both layers can show.
        """
        result: Dict[str, Dict[str, str]] = {}

        if not repo_only:
            layer = self._layer('global')
            for section in layer.sections():
                for key, value in layer.items(section):
                    result.setdefault(section, {})[f"{key} (global)"] = value

        if not global_only and self.repo_config_path is not None:
            layer = self._layer('repo')
            for section in layer.sections():
                for key, value in layer.items(section):
                    result.setdefault(section, {})[key] = value

        return result

    @property
    def lock_enabled(self) -> bool:
        return self.get_bool('core', 'lock', fallback=True)

    @property
    def log_level(self) -> str:
        return (self.get('log', 'level') or DEFAULT_LOG_LEVEL).upper()


def get_config(repo=None) -> Config:
    """Config for a repository, or global-only when repo is None."""
    if repo is not None:
        return Config(repo.config_file)
    return Config()
