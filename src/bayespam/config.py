# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating bayespam configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/bayespam/  (default: ~/.config/bayespam/)
#
# Files:
#   - config.toml: Classifier tuning and model location
#   - model.json: Trained model (current working directory unless configured)
#
# Example config.toml:
#
#   [model]
#   path = "model.json"
#   pretty = true
#
#   [classifier]
#   spam_threshold = 0.9
# =============================================================================

import logging
import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)

logger = logging.getLogger(__name__)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "bayespam"

# Model file used when nothing else is configured, relative to the cwd
DEFAULT_MODEL_PATH = Path("model.json")


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for bayespam.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/bayespam/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


# =============================================================================
# Configuration Data Structures
# =============================================================================

@dataclass
class ClassifierConfig:
    """
    Scoring policy of the classifier.

    The defaults are the classic values of this classifier. Changing them
    changes scores, not the model file.

    Attributes:
        initial_rating: Rating of a token never seen in training.
        spam_rating: Rating of a token seen only in spam.
        ham_rating: Rating of a token seen only in ham.
        min_rating: Floor for tokens seen in both spam and ham.
        spam_threshold: Messages scoring above this are spam.
        max_ratings: Above this many token ratings, only the most extreme
                     max_ratings / 2 lowest and highest ones are combined.
    """
    initial_rating: float = 0.5
    spam_rating: float = 0.99
    ham_rating: float = 0.01
    min_rating: float = 0.01
    spam_threshold: float = 0.8
    max_ratings: int = 20

    def validate(self) -> None:
        """
        Check that the values keep scoring well-defined.

        Ratings must lie strictly between 0 and 1.

        Raises:
            ConfigError: If a value is out of range.
        """
        for name in ("initial_rating", "spam_rating", "ham_rating", "min_rating"):
            value = getattr(self, name)
            if not _is_number(value) or not 0.0 < value < 1.0:
                raise ConfigError(f"classifier.{name} must be between 0 and 1 (exclusive), got {value!r}")

        if not _is_number(self.spam_threshold) or not 0.0 <= self.spam_threshold <= 1.0:
            raise ConfigError(f"classifier.spam_threshold must be between 0 and 1, got {self.spam_threshold!r}")

        if (
            isinstance(self.max_ratings, bool)
            or not isinstance(self.max_ratings, int)
            or self.max_ratings < 2
            or self.max_ratings % 2
        ):
            raise ConfigError(f"classifier.max_ratings must be an even integer >= 2, got {self.max_ratings!r}")


@dataclass
class ModelConfig:
    """
    Where the trained model lives.

    Attributes:
        path: Model file. Relative paths resolve against the cwd.
        pretty: Write the model as indented JSON.
    """
    path: Path = DEFAULT_MODEL_PATH
    pretty: bool = False


@dataclass
class Config:
    """
    Main configuration container for bayespam.

    Attributes:
        classifier: Scoring policy.
        model: Model file settings.

    Usage:
        >>> config = Config.load()
        >>> config.classifier.spam_threshold
        0.8
    """
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    model: ModelConfig = field(default_factory=ModelConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from a config file.

        If the file doesn't exist, returns default configuration.

        Args:
            path: Config file. Uses the XDG location if None.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            # No config file yet - return defaults
            logger.debug(f"No config file at {config_path}, using defaults")
            return cls()

        # Load and parse the TOML file
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e

        config = cls._from_dict(data)
        config.classifier.validate()
        logger.info(f"Loaded config from {config_path}")
        return config

    def save(self, path: Path | None = None) -> None:
        """
        Save configuration to a config file.

        Creates the config directory if it doesn't exist.

        Args:
            path: Config file. Uses the XDG location if None.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

        logger.info(f"Saved config to {config_path}")

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Missing keys fall back to the dataclass defaults.
        """
        config = cls()
        defaults = ClassifierConfig()

        # Classifier settings
        classifier = _section(data, "classifier")
        config.classifier = ClassifierConfig(
            initial_rating=classifier.get("initial_rating", defaults.initial_rating),
            spam_rating=classifier.get("spam_rating", defaults.spam_rating),
            ham_rating=classifier.get("ham_rating", defaults.ham_rating),
            min_rating=classifier.get("min_rating", defaults.min_rating),
            spam_threshold=classifier.get("spam_threshold", defaults.spam_threshold),
            max_ratings=classifier.get("max_ratings", defaults.max_ratings),
        )

        # Model settings
        model = _section(data, "model")
        path = model.get("path", str(DEFAULT_MODEL_PATH))
        if not isinstance(path, str) or not path:
            raise ConfigError(f"model.path must be a non-empty string, got {path!r}")
        pretty = model.get("pretty", False)
        if not isinstance(pretty, bool):
            raise ConfigError(f"model.pretty must be true or false, got {pretty!r}")
        config.model = ModelConfig(path=Path(path), pretty=pretty)

        return config

    def _to_dict(self) -> dict[str, Any]:
        """
        Convert Config to a dictionary for TOML serialization.
        """
        data: dict[str, Any] = {}

        data["model"] = {
            "path": str(self.model.path),
            "pretty": self.model.pretty,
        }

        data["classifier"] = {
            "initial_rating": self.classifier.initial_rating,
            "spam_rating": self.classifier.spam_rating,
            "ham_rating": self.classifier.ham_rating,
            "min_rating": self.classifier.min_rating,
            "spam_threshold": self.classifier.spam_threshold,
            "max_ratings": self.classifier.max_ratings,
        }

        return data


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a TOML table by name, empty if missing."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths(model_path: Path | None = None) -> None:
    """
    Print config and model paths for debugging.
    Useful for users wondering where their config/model is stored.
    """
    print(f"Config:       {get_xdg_config_home()}")
    print(f"Config file:  {Config.config_file_path()}")
    print(f"Model:        {(model_path or DEFAULT_MODEL_PATH).absolute()}")
