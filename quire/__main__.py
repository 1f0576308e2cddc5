#!/usr/bin/env python3
# Compilation mode
# nuitka-project: --assume-yes-for-downloads
# nuitka-project: --output-filename=Quire
# nuitka-project: --output-dir={MAIN_DIRECTORY}/../build/
# nuitka-project: --windows-console-mode=attach
# nuitka-project: --enable-plugin=pyside6
# nuitka-project: --include-data-dir={MAIN_DIRECTORY}/localization=quire/localization

# nuitka-project-if: {OS} == "Darwin":
#   nuitka-project: --mode=app
# nuitka-project-else:
#   nuitka-project: --mode=standalone

import os
import sys
import time
import traceback
from types import TracebackType
from typing import Type

import loguru
from loguru import logger
from PySide6.QtWidgets import QApplication

from quire.controllers.app_controller import AppController
from quire.controllers.instance_controller import InstanceController
from quire.controllers.settings_controller import load_settings
from quire.models.forward_request import ForwardRequest
from quire.utils.app_info import AppInfo
from quire.utils.command_line import raw_command_line
from quire.utils.constants import CoordinationOutcome, InstanceRole
from quire.utils.extractors import parse_command_line
from quire.utils.obfuscate_message import obfuscate_message
from quire.utils.single_instance import InstanceLock, PrimaryWindowLocator
from quire.views.dialogue import show_fatal_error, show_information, show_warning

START_TIME = time.perf_counter()

app_controller: AppController | None = None


def do_emergency_save() -> None:
    """
    Best effort attempt to save unsaved documents after an unrecoverable error.
    """
    if app_controller is None:
        return
    folder = AppInfo().emergency_save_folder
    show_information(
        title="Recovery initiating",
        text="Quire will attempt to save any unsaved data. However, data loss is very likely.",
    )
    if app_controller.emergency_save():
        show_information(
            title="Recovery success",
            text="Quire was able to recover your unsaved documents, or there was nothing to save.",
            information=f"You can find the results at: {folder}",
        )
    else:
        show_warning(
            title="Recovery failure",
            text="Unfortunately, Quire was not able to save your work. We are sorry for any lost data.",
        )


def handle_exception(
    exc_type: Type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
) -> None:
    """
    This function is called (through excepthook) when the main application
    loop encounters an uncaught exception. When this happens, the error is
    logged to the log file, a Fatal QMessageBox is shown and unsaved documents
    are rescued if possible.
    """

    # Ignore KeyboardInterrupt exceptions, for when running through the terminal
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
    else:  # Anything else, we want to log an error and notify the user
        logger.opt(exception=(exc_type, exc_value, exc_traceback)).error(
            "The main application loop has failed with an uncaught exception"
        )
        show_fatal_error(
            title="Quire crashed",
            text="The Quire application crashed! Sorry for the inconvenience!",
            information="Please report the issue with the log file attached.",
            details="".join(
                traceback.format_exception(exc_type, exc_value, exc_traceback)
            ),
        )
        do_emergency_save()

    sys.exit()


# Uncaught exceptions during the application loop are handled
# through the function above
sys.excepthook = handle_exception


def main_thread() -> None:
    global app_controller
    try:
        app = QApplication(sys.argv)
        config = parse_command_line(raw_command_line(sys.argv))
        settings = load_settings(config.settings_dir)

        instance_lock = InstanceLock(AppInfo().instance_lock_file)
        instance_controller = InstanceController(
            instance_lock,
            PrimaryWindowLocator(),
            retry_count=settings.instance_search_retries,
            retry_delay=settings.instance_search_delay_ms / 1000,
            reply_timeout_ms=settings.instance_reply_timeout_ms,
            release_shared_state=AppInfo.release,
        )
        role = instance_controller.determine_role(
            config.multi_instance or settings.always_multi_instance
        )
        setup_file_logging(rotate=role is InstanceRole.PRIMARY)
        logger.info(f"Initializing Quire application: {AppInfo().app_version}")
        result = instance_controller.coordinate(
            role, ForwardRequest(config=config, working_directory=os.getcwd())
        )
        if result.outcome is CoordinationOutcome.FORWARD_AND_EXIT:
            sys.exit(result.exit_code)

        app_controller = AppController(
            app, config, settings, instance_lock, start_time=START_TIME
        )
        sys.exit(app_controller.run())
    except Exception:
        # Catch exceptions during initial application instantiation
        # Uncaught exceptions during the application loop are caught with excepthook
        stacktrace = traceback.format_exc()
        logger.error(
            "The main application instantiation has failed with an uncaught exception:"
        )
        logger.error(stacktrace)
        show_fatal_error(details=stacktrace)
    finally:
        logger.info("Exiting application!")


def formatter(record: "loguru.Record") -> str:
    """Custom formatter for loguru logger"""
    format_string = (
        "[{level}]"
        "[{time:YYYY-MM-DD HH:mm:ss}]"
        "[{process.id}]"
        "[{thread.name}]"
        "[{module}]"
        "[{function}][{line}]"
        " : "
    )

    record["extra"]["obfuscated_message"] = obfuscate_message(record["message"])
    return format_string + "{extra[obfuscated_message]}\n{exception}"


def setup_stderr_logging() -> None:
    # Remove the default stderr logger
    logger.remove()

    # Add a "WARNING" or higher stderr logger
    logger.add(
        sys.stderr,
        level="WARNING",
        format=formatter,
        colorize=False,
    )


def setup_file_logging(rotate: bool) -> None:
    """
    Add the file logger once the instance role is known.

    Only a primary instance rotates the log (foo.log -> foo.old.log). A
    secondary one appends to the file the primary is still writing to.
    """
    # Set the log level from the presence (or absence) of a "DEBUG" file in the app_storage_folder
    debug_file_path = AppInfo().app_storage_folder / "DEBUG"
    debug_mode = debug_file_path.exists() and debug_file_path.is_file()

    log_file = AppInfo().user_log_folder / (AppInfo().app_name + ".log")
    old_log_file = AppInfo().user_log_folder / (AppInfo().app_name + ".old.log")
    if rotate:
        if old_log_file.exists() and old_log_file.is_file():
            old_log_file.unlink()
        if log_file.exists() and log_file.is_file():
            log_file.rename(old_log_file)

    logger.add(log_file, level="DEBUG" if debug_mode else "INFO", format=formatter)


def main() -> None:
    setup_stderr_logging()
    if "__compiled__" not in globals():
        logger.debug("Running using Python interpreter")
    else:
        logger.debug("Running using Nuitka bundle")

    main_thread()


if __name__ == "__main__":
    main()
