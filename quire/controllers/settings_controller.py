from loguru import logger

from quire.models.settings import Settings
from quire.utils.exception import SettingsLoadError
from quire.views.dialogue import show_warning


def load_settings(settings_dir: str = "") -> Settings:
    """
    Load the settings for this launch, falling back to the defaults.

    A corrupt or unreadable settings file must not keep the editor from
    starting, nor a secondary instance from forwarding its files. The user is
    warned and the defaults are used for this run. The file itself is left
    untouched so it can still be repaired.

    :param settings_dir: Directory given with -settingsDir=, if any
    :return: The loaded settings, or the defaults
    """
    logger.info("Attempting to load settings from settings file")
    settings_file = Settings.settings_file(settings_dir)
    try:
        return Settings.load(settings_dir)
    except SettingsLoadError:
        logger.error(f"Unable to parse settings file {settings_file}")
        reason = "The settings file could not be parsed."
    except OSError as e:
        logger.error(f"Unable to access settings file {settings_file}: {e}")
        reason = "The settings file could not be read or written."
    show_warning(
        title="Unable to load settings",
        text=reason,
        information=f"Quire starts with default settings. File: {settings_file}",
    )
    return Settings()
