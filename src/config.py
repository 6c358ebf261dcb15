"""
Configuration module for the Numbers Game round engine
Centralizes all constants, settings, and configuration with validation
"""

import os
import json
import logging
import threading
from pathlib import Path
from decimal import Decimal
from typing import Dict, Any, Optional, Union


class ConfigError(Exception):
    """Configuration validation error"""
    pass


def _safe_int_env(name: str, default: int, min_val: int = None, max_val: int = None) -> int:
    """
    Safely parse integer environment variable with bounds.
    Falls back to default on invalid values.
    """
    logger_local = logging.getLogger(__name__)
    try:
        value = int(os.getenv(name, str(default)))
        if min_val is not None:
            value = max(min_val, value)
        if max_val is not None:
            value = min(max_val, value)
        return value
    except (ValueError, TypeError):
        logger_local.warning(f"Invalid {name}, using default {default}")
        return default


class Config:
    """
    Configuration management with:
    - Input validation
    - Environment variable support
    - Safe defaults
    - JSON persistence with Decimal preservation
    """

    # ========== Game Rules ==========
    GAME_RULES = {
        'allowed_durations': (10, 15, 20),
        'default_duration': _safe_int_env('NUMBERS_DEFAULT_DURATION', 10),
        'tick_interval_ms': 1000,
        'resolving_dwell_ms': 1500,
        'result_dwell_ms': 3000,
        'history_size': _safe_int_env('NUMBERS_HISTORY_SIZE', 10, 1, 100),
        'size_multiplier': Decimal('1.9'),
        'color_multiplier': Decimal('2.8'),
        'number_multiplier': Decimal('9.0'),
    }

    # ========== Activity Feed (cosmetic) ==========
    FEED = {
        'max_entries': 5,
        'min_interval_ms': 1000,
        'max_interval_ms': 4000,
        'min_amount': 10,
        'max_amount': 1010,
    }

    # ========== UI Settings ==========
    UI = {
        'window_width': 960,
        'window_height': 720,
        'intro_step_ms': 50,
        'toast_duration_ms': 2500,
        'urgent_seconds': 5,
        'critical_seconds': 3,
        'theme': 'darkly',
        'font_family': 'Arial',
    }

    # ========== File Settings ==========
    @classmethod
    def get_files_config(cls) -> dict:
        """Get file configuration with lazy initialization to avoid import issues"""
        return {
            'config_dir': Path(os.getenv(
                'NUMBERS_CONFIG_DIR',
                str(Path.home() / '.numbers_game')
            )),
            'log_dir': Path(os.getenv(
                'NUMBERS_LOG_DIR',
                str(Path.home() / '.numbers_game' / 'logs')
            )),
        }

    # ========== Logging Settings ==========
    LOGGING = {
        'level': os.getenv('LOG_LEVEL', 'INFO'),
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'date_format': '%Y-%m-%d %H:%M:%S',
        'max_bytes': 5 * 1024 * 1024,
        'backup_count': 3,
        'json_logs': False,
    }

    def __init__(
        self,
        config_file: Optional[str] = None,
        validate: bool = True,
        ensure_directories: bool = True,
    ):
        """
        Initialize configuration with optional validation

        Args:
            config_file: Optional path to JSON config file
            validate: Whether to validate configuration on init
            ensure_directories: Create required directories on init
        """
        self._lock = threading.RLock()
        self._files_config: Optional[dict] = None
        self.config_file = config_file
        self._custom_settings = {}
        self._logger = None  # Will be set after logger initialization

        if ensure_directories:
            self.ensure_directories()

        if config_file:
            self.load_from_file(config_file)

        if validate:
            self.validate()

    @property
    def FILES(self) -> dict:
        """Cached file configuration"""
        with self._lock:
            if self._files_config is None:
                self._files_config = self.get_files_config()
            return self._files_config

    def ensure_directories(self) -> Dict[str, bool]:
        """Ensure all required directories exist, track success."""
        status: Dict[str, bool] = {}
        logger_local = self._logger or logging.getLogger(__name__)
        for key in ['config_dir', 'log_dir']:
            path = self.FILES[key]
            try:
                path.mkdir(parents=True, exist_ok=True)
                status[key] = path.exists() and path.is_dir()
            except OSError as e:
                logger_local.warning(f"Could not create {key}: {e}")
                status[key] = False
        self._directory_status = status
        return status

    def validate(self):
        """
        Validate all configuration values

        Raises:
            ConfigError: If configuration is invalid
        """
        # Round results only accept these lengths
        from models.round_result import ALLOWED_DURATIONS

        errors = []

        durations = self.get('game_rules', 'allowed_durations')
        if not durations or any(int(d) not in ALLOWED_DURATIONS for d in durations):
            errors.append(
                f"allowed_durations must be a non-empty subset of {ALLOWED_DURATIONS}"
            )
        elif self.get('game_rules', 'default_duration') not in durations:
            errors.append(
                f"default_duration must be one of {tuple(durations)}"
            )

        for key in ['tick_interval_ms', 'resolving_dwell_ms', 'result_dwell_ms']:
            if self.get('game_rules', key, 0) <= 0:
                errors.append(f"{key} must be positive")

        if self.get('game_rules', 'history_size', 0) < 1:
            errors.append("history_size must be at least 1")

        for key in ['size_multiplier', 'color_multiplier', 'number_multiplier']:
            if Decimal(str(self.get('game_rules', key, 0))) <= 0:
                errors.append(f"{key} must be positive")

        # Validate feed settings
        if self.get('feed', 'max_entries', 0) < 1:
            errors.append("feed max_entries must be at least 1")
        if self.get('feed', 'min_interval_ms', 0) <= 0:
            errors.append("feed min_interval_ms must be positive")
        if self.get('feed', 'max_interval_ms', 0) < self.get('feed', 'min_interval_ms', 0):
            errors.append("feed max_interval_ms must not be below min_interval_ms")

        # Validate UI settings
        if self.UI['window_width'] < 100 or self.UI['window_height'] < 100:
            errors.append("Window dimensions must be at least 100x100")

        # Validate logging
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.LOGGING['level'].upper() not in valid_levels:
            errors.append(f"Invalid log level: {self.LOGGING['level']}")

        if hasattr(self, '_directory_status'):
            for key, success in self._directory_status.items():
                if not success:
                    errors.append(f"Required directory {key} could not be created")

        if errors:
            raise ConfigError("Configuration validation failed:\n" + "\n".join(errors))

    def load_from_file(self, filepath: Union[str, Path]):
        """
        Load configuration from JSON file with validation

        Args:
            filepath: Path to JSON configuration file
        """
        filepath = Path(filepath)

        if not filepath.exists():
            if self._logger:
                self._logger.warning(f"Config file not found: {filepath}")
            return

        try:
            with open(filepath, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            error_msg = f"Invalid JSON in config file: {e}"
            if self._logger:
                self._logger.error(error_msg)
            raise ConfigError(error_msg)
        except OSError as e:
            error_msg = f"Error loading config file: {e}"
            if self._logger:
                self._logger.error(error_msg)
            raise ConfigError(error_msg)

        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a JSON object: {filepath}")

        for section in list(data):
            if isinstance(data[section], dict):
                data[section] = self._deserialize_dict(data[section])

        with self._lock:
            self._custom_settings = data

        if self._logger:
            self._logger.info(f"Loaded configuration from {filepath}")

    def save_to_file(self, filepath: Union[str, Path]):
        """
        Save current configuration to JSON file

        Args:
            filepath: Path where to save the configuration
        """
        filepath = Path(filepath)

        config_dict = {
            'game_rules': self._serialize_dict(self.GAME_RULES),
            'feed': dict(self.FEED),
            'ui': dict(self.UI),
            'logging': dict(self.LOGGING),
        }

        with self._lock:
            custom_settings = {k: dict(v) for k, v in self._custom_settings.items()}

        for section, values in custom_settings.items():
            if section in config_dict:
                config_dict[section].update(self._serialize_dict(values))
            else:
                config_dict[section] = self._serialize_dict(values)

        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2, default=str)

        if self._logger:
            self._logger.info(f"Saved configuration to {filepath}")

    def _serialize_dict(self, d: dict) -> dict:
        """Serialize dict with type preservation"""
        result = {}
        for key, value in d.items():
            if isinstance(value, Decimal):
                result[key] = {'__decimal__': str(value)}
            elif isinstance(value, Path):
                result[key] = {'__path__': str(value)}
            elif isinstance(value, tuple):
                result[key] = list(value)
            else:
                result[key] = value
        return result

    def _deserialize_dict(self, d: dict) -> dict:
        """Deserialize dict with type restoration"""
        result = {}
        for key, value in d.items():
            if isinstance(value, dict):
                if '__decimal__' in value:
                    result[key] = Decimal(value['__decimal__'])
                elif '__path__' in value:
                    result[key] = Path(value['__path__'])
                else:
                    result[key] = value
            elif isinstance(value, list):
                result[key] = tuple(value)
            else:
                result[key] = value
        return result

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get configuration value with support for custom settings

        Args:
            section: Configuration section name
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            section_lower = section.lower()
            if section_lower in self._custom_settings:
                if key in self._custom_settings[section_lower]:
                    return self._custom_settings[section_lower][key]

            section_attr = section.upper()
            if hasattr(self, section_attr):
                section_dict = getattr(self, section_attr)
                if callable(section_dict):
                    section_dict = section_dict()
                if isinstance(section_dict, dict):
                    return section_dict.get(key, default)

        return default

    def set(self, section: str, key: str, value: Any):
        """
        Set a configuration value

        Args:
            section: Configuration section name
            key: Configuration key
            value: Value to set
        """
        with self._lock:
            section_lower = section.lower()
            if section_lower not in self._custom_settings:
                self._custom_settings[section_lower] = {}
            self._custom_settings[section_lower][key] = value

    def set_logger(self, logger):
        """Set logger instance after logger initialization"""
        self._logger = logger

    @property
    def allowed_durations(self) -> tuple:
        """Round lengths the player may choose, in seconds"""
        return tuple(int(d) for d in self.get('game_rules', 'allowed_durations'))

    def to_dict(self) -> dict:
        """Export entire configuration as dictionary"""
        with self._lock:
            custom_settings = self._custom_settings.copy()

        return {
            'game_rules': self._serialize_dict(self.GAME_RULES),
            'feed': self.FEED,
            'ui': self.UI,
            'files': {k: str(v) for k, v in self.FILES.items()},
            'logging': self.LOGGING,
            'custom': custom_settings,
        }


# Create global configuration instance.
#
# IMPORTANT: Keep this import side-effect free. Runtime initialization (logging
# configuration, directory creation, validation) must happen in an explicit app
# startup path (see `src/main.py`).
config = Config(validate=False, ensure_directories=False)
