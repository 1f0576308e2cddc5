import os
import time

from loguru import logger
from PySide6.QtCore import QObject
from PySide6.QtWidgets import QApplication

from quire.models.forward_request import ForwardReply, ForwardRequest
from quire.models.launch_config import LaunchConfig
from quire.models.settings import Settings
from quire.utils.app_info import AppInfo
from quire.utils.constants import COMMAND_ARG_HELP, MAIN_WINDOW_CLASS_NAME
from quire.utils.single_instance import InstanceLock, PrimaryServer
from quire.utils.window_launch_state import apply_window_launch_state
from quire.views.dialogue import show_information
from quire.views.main_window import MainWindow


class AppController(QObject):
    """
    Bootstraps the primary instance from a finished LaunchConfig.

    Keeps the instance lock alive for the lifetime of the process and serves
    requests forwarded by later instances through the PrimaryServer.
    """

    def __init__(
        self,
        app: QApplication,
        config: LaunchConfig,
        settings: Settings,
        instance_lock: InstanceLock | None = None,
        start_time: float | None = None,
        server_name: str = MAIN_WINDOW_CLASS_NAME,
    ) -> None:
        super().__init__()

        self.app = app
        self.config = config
        self.settings = settings
        self.instance_lock = instance_lock
        self.server_name = server_name
        self.start_time = start_time if start_time is not None else time.perf_counter()

        if config.show_help:
            show_information(
                title=AppInfo().app_name,
                text=self.tr("Command line arguments"),
                details=COMMAND_ARG_HELP,
            )
        # Initialize the main window
        self.initialize_main_window()
        # Listen for requests of other instances
        self.initialize_primary_server()
        self.log_unhandled_options()
        self.app.aboutToQuit.connect(self.shutdown)

    def initialize_main_window(self) -> None:
        """Initializes the main window and opens the requested files."""
        self.main_window = MainWindow(minimize_to_tray=self.settings.minimize_to_tray)
        self.main_window.apply_launch_config(self.config)
        self.main_window.open_files(self.config, os.getcwd())

    def initialize_primary_server(self) -> None:
        """
        Initializes the endpoint later instances forward their requests to.

        Only the lock owner serves. A forced multi-instance process, or one that
        fell back to primary, leaves the endpoint of the real primary alone.
        """
        self.primary_server: PrimaryServer | None = None
        if self.instance_lock is None or not self.instance_lock.is_held:
            logger.info("Not holding the instance lock, other instances are not served")
            return
        self.primary_server = PrimaryServer(
            self.handle_forward_request, server_name=self.server_name, parent=self
        )
        self.primary_server.listen()

    def handle_forward_request(self, request: ForwardRequest) -> ForwardReply:
        return self.main_window.handle_forward_request(request)

    def log_unhandled_options(self) -> None:
        """Options carried in the LaunchConfig that this window does not act upon."""
        config = self.config
        unhandled = {
            "no_plugins": config.no_plugins,
            "no_session": config.no_session,
            "recursive": config.recursive,
            "open_folders_as_workspace": config.open_folders_as_workspace,
            "monitor_files": config.monitor_files,
            "export_function_list": config.export_function_list,
            "quick_print": config.quick_print,
            "lang_type": config.lang_type.value,
            "localization_path": config.localization_path,
            "session_file": config.session_file,
            "udl_name": config.udl_name,
            "plugin_message": config.plugin_message,
            "easter_egg": config.easter_egg,
            "ghost_typing_speed": config.ghost_typing_speed,
        }
        for option, value in unhandled.items():
            if value:
                logger.debug(f"Option not handled by the main window: {option}={value}")

    def run(self) -> int:
        """Runs the main application loop after showing the main window."""
        apply_window_launch_state(
            self.main_window,
            self.settings.main_window_launch_state,
            start_in_tray=self.config.system_tray,
        )
        if self.config.show_loading_time:
            elapsed = time.perf_counter() - self.start_time
            logger.info(f"Loading time: {elapsed:.3f} seconds")
            show_information(
                title=AppInfo().app_name,
                text=self.tr("Loading time: {elapsed:.3f} seconds").format(
                    elapsed=elapsed
                ),
                parent=self.main_window,
            )
        return self.app.exec()

    def emergency_save(self) -> bool:
        """Dumps unsaved documents into the emergency folder."""
        return self.main_window.emergency_save(AppInfo().emergency_save_folder)

    def shutdown(self) -> None:
        """Stop serving other instances and give up the instance lock."""
        if self.primary_server is not None:
            self.primary_server.close()
        if self.instance_lock is not None:
            self.instance_lock.release()

    def quit(self) -> None:
        """Exit the application."""
        self.app.quit()
