'''
Configuration management system for armakit.

Configuration is layered:
1. Default configurations built into the package
2. A user configuration file (JSON)
3. Environment variables
4. Runtime modifications

Each section is a dataclass. The query operations on a process read their
default resolution and horizons from the ``models`` section at call time,
so changing a default with :func:`set_config` affects subsequent calls only.

Environment overrides use the form ``ARMAKIT_<SECTION>_<OPTION>``, for
example ``ARMAKIT_MODELS_SPECTRAL_RESOLUTION=2400``. The configuration file
lives at ``$ARMAKIT_CONFIG_DIR/armakit_config.json`` (``~/.armakit`` when the
variable is unset) and is only read, never created, unless
:func:`save_config` is called.
'''

import os
import json
import numbers
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, get_type_hints

from .exceptions import ConfigurationError
from .types import ConfigDict, LogLevel

# Set up module-level logger
logger = logging.getLogger("armakit.core.config")

CONFIG_ENV_PREFIX = "ARMAKIT_"
DEFAULT_CONFIG_FILENAME = "armakit_config.json"
USER_CONFIG_DIR_ENV = "ARMAKIT_CONFIG_DIR"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigSection(Enum):
    """Enumeration of configuration sections."""
    MODELS = "models"
    NUMERICAL = "numerical"
    LOGGING = "logging"


@dataclass
class ModelsConfig:
    """
    Default arguments for the process query operations.

    Attributes:
        spectral_resolution: Number of frequencies in the spectral density grid,
            also the grid used by the autocovariance computation
        num_autocov: Number of autocovariance lags returned
        impulse_length: Number of impulse response coefficients
        ts_length: Length of simulated paths
    """
    spectral_resolution: int = 1200
    num_autocov: int = 16
    impulse_length: int = 30
    ts_length: int = 90


@dataclass
class NumericalConfig:
    """
    Numerical configuration settings.

    Attributes:
        use_numba: Whether to run the recurrence and convolution kernels
            through their Numba-compiled versions
        strict_autocovariance_bound: Whether asking for more autocovariance
            lags than half the grid resolution raises instead of warning
    """
    use_numba: bool = True
    strict_autocovariance_bound: bool = True


@dataclass
class LoggingConfig:
    """
    Logging configuration settings.

    Attributes:
        log_level: Default logging level
        log_format: Format string for log messages
        log_date_format: Format string for log message timestamps
        console_logging: Whether to log to console
    """
    log_level: LogLevel = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    console_logging: bool = True


@dataclass
class ArmaKitConfig:
    """
    Complete configuration for armakit.

    Attributes:
        models: Default query arguments
        numerical: Numerical behavior switches
        logging: Logging configuration settings
    """
    models: ModelsConfig = field(default_factory=ModelsConfig)
    numerical: NumericalConfig = field(default_factory=NumericalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Configuration manager for armakit.

    Holds the current configuration and provides methods to get, set, and
    reset options. Initialization is lazy: the file and environment layers
    are applied on first access.

    Attributes:
        _config: The current configuration object
        _initialized: Whether the configuration manager has been initialized
        _config_file: Path to the user configuration file
    """

    def __init__(self):
        """Initialize the configuration manager with default settings."""
        self._config = ArmaKitConfig()
        self._initialized = False
        self._config_file: Optional[Path] = None
        self._modified_keys = set()

    def initialize(self) -> None:
        """
        Initialize the configuration manager.

        Loads the user configuration file if present, applies environment
        variable overrides, configures the package logger and validates the
        resulting values.
        """
        if self._initialized:
            return

        self._locate_user_config()
        self._load_user_config()
        self._apply_env_overrides()
        self._setup_logging()
        self._validate_config()

        self._initialized = True
        logger.debug("Configuration manager initialized")

    def _locate_user_config(self) -> None:
        env_config_dir = os.environ.get(USER_CONFIG_DIR_ENV)
        if env_config_dir:
            user_config_dir = Path(env_config_dir)
        else:
            user_config_dir = Path.home() / ".armakit"
        self._config_file = user_config_dir / DEFAULT_CONFIG_FILENAME

    def _load_user_config(self) -> None:
        """
        Load user configuration from file.

        A missing file is not an error. A file that cannot be parsed is
        reported as a warning and ignored.
        """
        if not self._config_file or not self._config_file.exists():
            logger.debug("No user configuration file found")
            return

        try:
            with open(self._config_file, 'r') as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load user configuration: {e}")
            return

        self._update_from_dict(user_config)
        logger.debug(f"Loaded user configuration from {self._config_file}")

    def _apply_env_overrides(self) -> None:
        """
        Apply environment variable overrides to the configuration.

        Variables take the form ``ARMAKIT_<SECTION>_<OPTION>``; unknown
        sections and options are skipped.
        """
        for env_var, value in os.environ.items():
            if not env_var.startswith(CONFIG_ENV_PREFIX):
                continue

            # Remove prefix and split into section and option
            key = env_var[len(CONFIG_ENV_PREFIX):]
            parts = key.lower().split('_', 1)

            if len(parts) != 2:
                continue

            section, option = parts

            try:
                ConfigSection(section)
            except ValueError:
                continue

            section_obj = getattr(self._config, section)
            if not hasattr(section_obj, option):
                continue

            current_value = getattr(section_obj, option)
            value_type = type(current_value)

            try:
                if value_type is bool:
                    typed_value = value.lower() in ('true', 'yes', '1', 'y')
                elif value_type is int:
                    typed_value = int(value)
                elif value_type is float:
                    typed_value = float(value)
                else:
                    typed_value = value
            except ValueError as e:
                logger.warning(f"Failed to apply environment override {env_var}: {e}")
                continue

            setattr(section_obj, option, typed_value)
            logger.debug(f"Applied environment override: {env_var}={value}")

    def _setup_logging(self) -> None:
        """
        Configure the ``armakit`` logger from the logging section.
        """
        root_logger = logging.getLogger("armakit")

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        log_level = getattr(logging, self._config.logging.log_level, logging.INFO)
        root_logger.setLevel(log_level)

        if self._config.logging.console_logging:
            formatter = logging.Formatter(
                fmt=self._config.logging.log_format,
                datefmt=self._config.logging.log_date_format
            )
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

    def _validate_config(self) -> None:
        for section in ConfigSection:
            self._validate_section(getattr(self._config, section.value), section.value)

    def _validate_section(self, section: Any, section_name: str) -> None:
        """
        Validate a configuration section, resetting invalid values to defaults.

        Args:
            section: The configuration section to validate
            section_name: The name of the section
        """
        hints = get_type_hints(type(section))
        defaults = type(section)()

        for attr_name, attr_type in hints.items():
            value = getattr(section, attr_name)
            default = getattr(defaults, attr_name)

            if attr_name == "log_level":
                if value not in LOG_LEVELS:
                    logger.warning(f"Invalid log level: {value}, using INFO")
                    setattr(section, attr_name, "INFO")
                continue

            if type(value) is not type(default):
                logger.warning(
                    f"Invalid type for {section_name}.{attr_name}: "
                    f"expected {type(default).__name__}, got {type(value).__name__}"
                )
                setattr(section, attr_name, default)
                continue

            # Every integer option is a count or a horizon
            if isinstance(value, int) and not isinstance(value, bool) and value <= 0:
                logger.warning(
                    f"Invalid {section_name}.{attr_name}: {value}, must be positive"
                )
                setattr(section, attr_name, default)

    def _update_from_dict(self, config_dict: ConfigDict) -> None:
        """
        Update the configuration from a dictionary.

        Args:
            config_dict: Dictionary containing configuration values
        """
        for section_name, section_dict in config_dict.items():
            if not hasattr(self._config, section_name):
                logger.warning(f"Unknown configuration section: {section_name}")
                continue

            section = getattr(self._config, section_name)

            for option_name, option_value in section_dict.items():
                if not hasattr(section, option_name):
                    logger.warning(f"Unknown configuration option: {section_name}.{option_name}")
                    continue

                setattr(section, option_name, option_value)

    def save_user_config(self) -> None:
        """
        Save the current configuration to the user configuration file.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        if not self._config_file:
            self._locate_user_config()

        try:
            self._config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_file, 'w') as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(
                "Failed to save user configuration",
                config_file=self._config_file,
                issue=str(e)
            ) from e

        logger.debug(f"Saved user configuration to {self._config_file}")

    def to_dict(self) -> ConfigDict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary representation of the configuration
        """
        result = {}
        for section in ConfigSection:
            section_obj = getattr(self._config, section.value)
            result[section.value] = {
                field_name: getattr(section_obj, field_name)
                for field_name in section_obj.__dataclass_fields__
            }
        return result

    def get(self, section: str, option: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            section: The configuration section
            option: The configuration option
            default: Default value if the option is not found

        Returns:
            The configuration value, or the default if not found
        """
        if not self.has_section(section):
            return default

        section_obj = getattr(self._config, section)

        if not hasattr(section_obj, option):
            return default

        return getattr(section_obj, option)

    def set(self, section: str, option: str, value: Any) -> None:
        """
        Set a configuration value.

        The value is converted to the type of the option's current value.
        Integer options accept integers and integer strings only, so a float
        is rejected rather than truncated.

        Args:
            section: The configuration section
            option: The configuration option
            value: The value to set

        Raises:
            ConfigurationError: If the section or option is not found, or the
                value cannot be converted or is out of range
        """
        section_obj = self.get_section(section)

        if not hasattr(section_obj, option):
            raise ConfigurationError(
                f"Unknown configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue="Option not found"
            )

        value_type = type(getattr(section_obj, option))

        if value_type is int and (isinstance(value, bool)
                                  or not isinstance(value, (numbers.Integral, str))):
            raise ConfigurationError(
                f"Configuration option {section}.{option} must be an integer",
                setting=f"{section}.{option}",
                value=value,
                issue=f"Got {type(value).__name__}"
            )

        if option == "log_level":
            value = str(value).upper()
            if value not in LOG_LEVELS:
                raise ConfigurationError(
                    f"Invalid log level: {value}",
                    setting=f"{section}.{option}",
                    value=value,
                    issue=f"Expected one of {', '.join(LOG_LEVELS)}"
                )

        try:
            if value_type is bool and isinstance(value, str):
                typed_value = value.lower() in ('true', 'yes', '1', 'y')
            elif value_type is not type(value):
                typed_value = value_type(value)
            else:
                typed_value = value
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to set configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue=str(e)
            ) from e

        if value_type is int and typed_value <= 0:
            raise ConfigurationError(
                f"Configuration option {section}.{option} must be positive",
                setting=f"{section}.{option}",
                value=value,
                issue="Non-positive count"
            )

        setattr(section_obj, option, typed_value)
        self._modified_keys.add(f"{section}.{option}")

        if section == ConfigSection.LOGGING.value:
            self._setup_logging()

        logger.debug(f"Set configuration option: {section}.{option}={value}")

    def reset(self, section: Optional[str] = None, option: Optional[str] = None) -> None:
        """
        Reset configuration to default values.

        Args:
            section: The configuration section to reset, or None to reset all
            option: The configuration option to reset, or None to reset the entire section

        Raises:
            ConfigurationError: If the section or option is not found
        """
        if section is None:
            self._config = ArmaKitConfig()
            self._modified_keys.clear()
            self._setup_logging()
            logger.debug("Reset all configuration to defaults")
            return

        section_obj = self.get_section(section)
        default_config = ArmaKitConfig()

        if option is None:
            setattr(self._config, section, getattr(default_config, section))
            self._modified_keys = {k for k in self._modified_keys if not k.startswith(f"{section}.")}
            if section == ConfigSection.LOGGING.value:
                self._setup_logging()
            logger.debug(f"Reset configuration section: {section}")
            return

        if not hasattr(section_obj, option):
            raise ConfigurationError(
                f"Unknown configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                issue="Option not found"
            )

        setattr(section_obj, option, getattr(getattr(default_config, section), option))
        self._modified_keys.discard(f"{section}.{option}")
        if section == ConfigSection.LOGGING.value:
            self._setup_logging()
        logger.debug(f"Reset configuration option: {section}.{option}")

    def is_modified(self, section: str, option: str) -> bool:
        """
        Check if a configuration option has been modified at runtime.
        """
        return f"{section}.{option}" in self._modified_keys

    def has_section(self, section: str) -> bool:
        return section in {s.value for s in ConfigSection}

    def get_section(self, section: str) -> Any:
        """
        Get a configuration section object.

        Raises:
            ConfigurationError: If the section is not found
        """
        if not self.has_section(section):
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=section,
                issue="Section not found"
            )

        return getattr(self._config, section)

    def get_config_file(self) -> Optional[Path]:
        return self._config_file


# Create a singleton instance of the configuration manager
_config_manager = ConfigManager()


def initialize_config() -> None:
    """
    Initialize the configuration system.

    Loads the user configuration file and applies environment variable
    overrides. Repeated calls are no-ops.
    """
    _config_manager.initialize()


def get_config_manager() -> ConfigManager:
    """
    Get the configuration manager instance.

    Returns:
        The configuration manager instance
    """
    if not _config_manager._initialized:
        initialize_config()

    return _config_manager


def get_config(section: str, option: str, default: Any = None) -> Any:
    """
    Get a configuration value.

    Args:
        section: The configuration section
        option: The configuration option
        default: Default value if the option is not found

    Returns:
        The configuration value, or the default if not found
    """
    return get_config_manager().get(section, option, default)


def set_config(section: str, option: str, value: Any) -> None:
    """
    Set a configuration value.

    Raises:
        ConfigurationError: If the section or option is not found
    """
    get_config_manager().set(section, option, value)


def reset_config(section: Optional[str] = None, option: Optional[str] = None) -> None:
    """
    Reset configuration to default values.

    Args:
        section: The configuration section to reset, or None to reset all
        option: The configuration option to reset, or None to reset the entire section

    Raises:
        ConfigurationError: If the section or option is not found
    """
    get_config_manager().reset(section, option)


def save_config() -> None:
    """
    Save the current configuration to the user configuration file.
    """
    get_config_manager().save_user_config()


def get_models_config() -> ModelsConfig:
    """
    Get the default query arguments.

    Returns:
        The models configuration object
    """
    return get_config_manager().get_section("models")


def get_numerical_config() -> NumericalConfig:
    """
    Get the numerical configuration.

    Returns:
        The numerical configuration object
    """
    return get_config_manager().get_section("numerical")


def to_dict() -> Dict[str, Any]:
    """
    Convert the current configuration to a dictionary.
    """
    return get_config_manager().to_dict()
