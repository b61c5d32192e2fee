"""Engine configuration (config.yml) and logging setup."""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from tawindow.technical_analysis.chunking import ChunkConfig

logger = logging.getLogger(__name__)

# Shipped inside the package as package data
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / 'config.yml'


class ConfigLoader:
    """Read-only view of a YAML configuration file."""

    def __init__(self, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)
        self.config = self._read()

    def _read(self) -> Dict[str, Any]:
        """Parse the file; an empty file yields an empty mapping."""
        try:
            with self.config_path.open('r') as handle:
                return yaml.safe_load(handle) or {}
        except FileNotFoundError:
            logger.error(f"Config file '{self.config_path}' does not exist")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Config file '{self.config_path}' is not valid YAML: {e}")
            raise

    def get(self, section: str, default: Any = None) -> Any:
        """Top-level section, or ``default`` when absent."""
        return self.config.get(section, default)

    def __getitem__(self, section: str) -> Any:
        return self.config[section]

    def get_all(self) -> Dict[str, Any]:
        return self.config


def setup_logging(config: Optional[Dict[str, Any]]) -> None:
    """
    Apply a ``logging.config.dictConfig`` mapping.

    A malformed mapping falls back to ``basicConfig`` at INFO and logs a
    warning instead of raising.
    """
    try:
        logging.config.dictConfig(config)
        logger.debug("Logging configured from dictConfig mapping")
    except (ValueError, TypeError, AttributeError) as e:
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logging.warning(f"Invalid logging config ({e}). Using basic config.")


def load_chunk_config(source: Union[ConfigLoader, Mapping[str, Any], None] = None) -> ChunkConfig:
    """
    Build the chunking configuration from the ``engine`` section.

    Args:
        source: A ConfigLoader, the full configuration mapping, or None to
            read the default ``config.yml``.

    Returns:
        ChunkConfig: Validated configuration; missing keys use defaults.

    Raises:
        InvalidChunkConfigError: If the section holds invalid values.
    """
    if source is None:
        source = ConfigLoader()
    settings = source.get('engine') or {}
    config = ChunkConfig.from_dict(settings)
    logger.debug(f"Loaded chunk config: {config}")
    return config
