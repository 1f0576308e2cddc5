import tempfile
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from platformdirs import PlatformDirs

from quire.utils.constants import (
    APP_NAME,
    EMERGENCY_SAVE_FOLDER_NAME,
    INSTANCE_LOCK_NAME,
)


class AppInfo:
    """
    Singleton class that provides information about the application and its related directories.

    The directories are determined using the `platformdirs` package, ensuring
    platform-specific conventions are adhered to.

    Examples:
        >>> print(AppInfo().app_name)
        >>> print(AppInfo().app_storage_folder)
    """

    _instance: "None | AppInfo" = None

    def __new__(cls) -> "AppInfo":
        """
        Create a new instance or return the existing singleton instance of the `AppInfo` class.
        """
        if not cls._instance:
            cls._instance = super(AppInfo, cls).__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """
        Initialize the `AppInfo` instance, setting application metadata and determining important directories.
        """
        if hasattr(self, "_is_initialized") and self._is_initialized:
            return

        # quire/utils/app_info.py -> repository (or site-packages) root
        self._application_folder = Path(__file__).resolve().parent.parent.parent

        # Application metadata

        self._app_name = APP_NAME
        try:
            self._app_version = version("quire")
        except PackageNotFoundError:
            self._app_version = "Unknown version"

        # Define important directories using platformdirs

        platform_dirs = PlatformDirs(appname=self._app_name, appauthor=False)
        self._app_storage_folder: Path = Path(platform_dirs.user_data_dir)
        self._user_log_folder: Path = Path(platform_dirs.user_log_dir)

        # Derive some secondary directory paths

        self._localization_folder: Path = (
            self._application_folder / "quire" / "localization"
        )
        self._settings_file: Path = self._app_storage_folder / "settings.json"
        self._instance_lock_file: Path = (
            self._app_storage_folder / f"{INSTANCE_LOCK_NAME}.lock"
        )
        self._emergency_save_folder: Path = (
            Path(tempfile.gettempdir()) / EMERGENCY_SAVE_FOLDER_NAME
        )

        # Make sure important directories exist

        self._app_storage_folder.mkdir(parents=True, exist_ok=True)
        self._user_log_folder.mkdir(parents=True, exist_ok=True)

        self._is_initialized: bool = True

    @classmethod
    def release(cls) -> None:
        """
        Drop the singleton so the next access rebuilds it.

        Used by a secondary instance right before it hands its request over.
        """
        cls._instance = None

    @property
    def app_name(self) -> str:
        """
        Get the name of the application.

        Returns:
            str: The name of the application.
        """
        return self._app_name

    @property
    def app_version(self) -> str:
        """
        Get the application version string.

        Returns:
            str: The version of the application.
        """
        return self._app_version

    @property
    def application_folder(self) -> Path:
        """
        Get the path to the folder the application is installed in.

        Returns:
            Path: The path to the application's main folder.
        """
        return self._application_folder

    @property
    def app_storage_folder(self) -> Path:
        """
        Get the path to the folder where user-specific data for the application is stored.

        This directory is determined using platform-specific conventions.

        Returns:
            Path: The path to the user-specific data folder.
        """
        return self._app_storage_folder

    @property
    def app_settings_file(self) -> Path:
        """
        Get the path to the default settings file.

        Returns:
            Path: The path to settings.json in the storage folder.
        """
        return self._settings_file

    @property
    def user_log_folder(self) -> Path:
        """
        Get the path to the folder where application logs are stored for the user.

        This directory is determined using platform-specific conventions.

        Returns:
            Path: The path to the user-specific log folder.
        """
        return self._user_log_folder

    @property
    def localization_folder(self) -> Path:
        """
        Get the path to the folder holding the localization files.
        """
        return self._localization_folder

    @property
    def instance_lock_file(self) -> Path:
        """
        Get the path of the lock file marking a running primary instance.
        """
        return self._instance_lock_file

    @property
    def emergency_save_folder(self) -> Path:
        """
        Get the folder unsaved documents are dumped into after a crash.
        """
        return self._emergency_save_folder
