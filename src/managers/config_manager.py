"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and exposes typed configuration sections.
"""

import yaml
from pathlib import Path
from typing import Dict, List

from utils.logger import get_logger, LogCategory
from models.config import PlaybackConfig, PresenterConfig, ApiConfig

log = get_logger().for_category(LogCategory.CONFIG)


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    Builds typed sections (PlaybackConfig, PresenterConfig, ApiConfig) from the
    merged data; missing sections fall back to dataclass defaults.

    Example:
        config = ConfigManager()
        config.load()

        config.playback.channel_name        # "deckode-present"
        config.presenter.keys.advance       # ["RIGHT", "SPACE"]
        config.api.port                     # 8000
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to src/, or absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}

        self.playback = PlaybackConfig()
        self.presenter = PresenterConfig()
        self.api = ApiConfig()

    def load(self) -> Dict:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory_defaults.yaml on failure
        5. Build typed sections

        Returns:
            Merged config data dict
        """
        src_dir = Path(__file__).parent.parent
        try:
            full_path = src_dir / self.config_path

            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config['include'], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = src_dir / self.factory_defaults_path
            with open(defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        self._build_sections()

        return self.data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["playback.yaml", "api.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    def _build_sections(self):
        """Convert raw sections to typed configs, keeping defaults for anything invalid"""
        try:
            self.playback = PlaybackConfig.from_dict(self.data.get("playback") or {})
        except (TypeError, ValueError) as ex:
            log.error("Invalid playback section, using defaults", error=str(ex))
            self.playback = PlaybackConfig()

        try:
            self.presenter = PresenterConfig.from_dict(self.data.get("presenter") or {})
        except (TypeError, ValueError) as ex:
            log.error("Invalid presenter section, using defaults", error=str(ex))
            self.presenter = PresenterConfig()

        try:
            self.api = ApiConfig.from_dict(self.data.get("api") or {})
        except (TypeError, ValueError) as ex:
            log.error("Invalid api section, using defaults", error=str(ex))
            self.api = ApiConfig()

        log.info(
            "Configuration ready",
            channel=self.playback.channel_name,
            api=f"{self.api.host}:{self.api.port}" if self.api.enabled else "disabled"
        )
