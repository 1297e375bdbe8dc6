"""
Configuration for the OCR layout system.

Settings live in ``settings.yaml`` next to this module and are read once
per process. Only the shell reads them: engine ranking, language
profiles, recognition mode, header policy and the batch failure marker.
Layout heuristics are module constants in ``ocr_layout.postprocessor``.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"


class ConfigurationManager:
    """
    Process-wide settings loaded from a YAML file.

    The first instantiation decides which file is loaded; later calls
    return the same instance whatever path they pass.

    Example:
        >>> ConfigurationManager().get("layout.header_detection")
        'cjk'
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Load the settings file on first use.

        Args:
            config_path: YAML file to load instead of ``settings.yaml``.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
        """
        if self._initialized:
            return

        self.config_path = Path(config_path) if config_path else DEFAULT_SETTINGS_PATH
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}"
            )

        with open(self.config_path, 'r', encoding='utf-8') as f:
            # An empty file loads as None
            self._config = yaml.safe_load(f) or {}
        self._initialized = True

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key such as ``"ocr.language.profiles.cjk"``.

        Returns ``default`` when any segment is missing or a segment
        lands on a non-mapping value.
        """
        value: Any = self._config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded settings so the next call reloads them."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ``ConfigurationManager().get(key, default)``."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
