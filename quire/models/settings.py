from pathlib import Path

import msgspec
from loguru import logger

from quire.utils.app_info import AppInfo
from quire.utils.constants import (
    INSTANCE_REPLY_TIMEOUT_MS,
    INSTANCE_SEARCH_DELAY_MS,
    INSTANCE_SEARCH_RETRIES,
)
from quire.utils.exception import SettingsLoadError

SETTINGS_FILE_NAME = "settings.json"


class Settings(msgspec.Struct):
    """
    Persistent user settings, stored as settings.json.

    Pure data class; ``load`` and ``save`` take care of the file.
    """

    # Instances
    always_multi_instance: bool = False
    instance_search_retries: int = INSTANCE_SEARCH_RETRIES
    instance_search_delay_ms: int = INSTANCE_SEARCH_DELAY_MS
    instance_reply_timeout_ms: int = INSTANCE_REPLY_TIMEOUT_MS

    # Main Window
    minimize_to_tray: bool = False
    # "maximized" or "normal"
    main_window_launch_state: str = "maximized"

    # Language
    language: str = "en_US"

    @staticmethod
    def settings_file(settings_dir: str = "") -> Path:
        """Settings file inside ``settings_dir``, or the default one when empty."""
        if settings_dir:
            return Path(settings_dir) / SETTINGS_FILE_NAME
        return AppInfo().app_settings_file

    @classmethod
    def load(cls, settings_dir: str = "") -> "Settings":
        """
        Load settings from disk, writing the defaults if there is no file yet.

        :param settings_dir: Directory given with -settingsDir=, if any
        :raises SettingsLoadError: If the file exists but cannot be decoded
        """
        settings_file = cls.settings_file(settings_dir)
        try:
            with open(settings_file, "rb") as file:
                settings = msgspec.json.decode(file.read(), type=cls)
        except FileNotFoundError:
            logger.info(f"No settings file at {settings_file}, creating defaults")
            settings = cls()
            settings.save(settings_dir)
        except msgspec.DecodeError as e:
            logger.error(f"Unable to decode settings file {settings_file}: {e}")
            raise SettingsLoadError(str(settings_file)) from e
        return settings

    def save(self, settings_dir: str = "") -> None:
        settings_file = self.settings_file(settings_dir)
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        with open(settings_file, "wb") as file:
            file.write(msgspec.json.format(msgspec.json.encode(self), indent=4))
