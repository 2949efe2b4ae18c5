# labelbot/services/config_store.py
"""Loading the policy file and holding the active snapshot."""

import logging
import threading
from pathlib import Path

import yaml

from labelbot.models.policy import ConfigError, Configuration

logger = logging.getLogger(__name__)


def load_configuration(path: str | Path) -> Configuration:
    """
    Load and validate the policy file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated Configuration snapshot

    Raises:
        ConfigError: If the file is missing, unparsable or invalid
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}") from e

    if not data:
        raise ConfigError("Configuration file is empty")
    if not isinstance(data, dict):
        raise ConfigError("Configuration file must contain a mapping")

    configuration = Configuration.from_dict(data)
    errors = configuration.validate()
    if errors:
        raise ConfigError("; ".join(errors))
    return configuration


class ConfigStore:
    """
    Holds the current Configuration.

    Readers take ``current`` once per event and keep using that snapshot.
    ``reload`` builds a complete new snapshot before swapping the reference,
    so an in-flight event never sees a half-updated configuration.
    """

    def __init__(self, path: str | Path, configuration: Configuration | None = None) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._current = configuration if configuration is not None else load_configuration(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def current(self) -> Configuration:
        with self._lock:
            return self._current

    def reload(self) -> bool:
        """
        Re-read the policy file.

        Returns:
            True if the new snapshot was installed, False if the old one was kept
        """
        try:
            configuration = load_configuration(self._path)
        except ConfigError as e:
            logger.error(f"Reload of {self._path} failed, keeping previous configuration: {e}")
            return False

        with self._lock:
            self._current = configuration
        logger.info(f"Reloaded {self._path}: {len(configuration.config_items)} repository policies")
        return True
