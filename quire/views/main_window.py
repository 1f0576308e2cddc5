from pathlib import Path

from loguru import logger
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QMenu,
    QPlainTextEdit,
    QStyle,
    QSystemTrayIcon,
    QTabWidget,
)

from quire.models.forward_request import ForwardReply, ForwardRequest
from quire.models.launch_config import LaunchConfig
from quire.utils.app_info import AppInfo
from quire.utils.files import relative_file_path_to_full_file_path


class MainWindow(QMainWindow):
    """
    Subclass QMainWindow to host one plain text editor per opened file.

    Besides opening files, the window answers restore requests coming from
    other instances and can dump unsaved documents after a crash.
    """

    def __init__(self, minimize_to_tray: bool = False) -> None:
        logger.info("Initializing MainWindow")
        super(MainWindow, self).__init__()

        self.minimize_to_tray_enabled = minimize_to_tray
        self.title_suffix = ""
        self._in_tray = False

        self.tabs = QTabWidget()
        self.tabs.setTabsClosable(True)
        self.tabs.setDocumentMode(True)
        self.tabs.tabCloseRequested.connect(self.tabs.removeTab)
        self.tabs.currentChanged.connect(lambda _: self.update_title())
        self.setCentralWidget(self.tabs)

        self.tray_icon: QSystemTrayIcon | None = None
        if QSystemTrayIcon.isSystemTrayAvailable():
            self.tray_icon = QSystemTrayIcon(
                self.style().standardIcon(QStyle.StandardPixmap.SP_FileIcon), self
            )
            self.tray_icon.activated.connect(lambda _: self.restore_from_tray())
            tray_menu = QMenu(self)
            quit_action = QAction(self.tr("Quit"), self)
            quit_action.triggered.connect(QApplication.quit)
            tray_menu.addAction(quit_action)
            self.tray_icon.setContextMenu(tray_menu)

        self.resize(900, 600)
        self.update_title()
        logger.info("Finished MainWindow initialization")

    @property
    def in_tray(self) -> bool:
        return self._in_tray

    def update_title(self) -> None:
        title = AppInfo().app_name
        editor = self.tabs.currentWidget()
        if editor is not None:
            title = f"{editor.property('file_path')} - {title}"
        if self.title_suffix:
            title = f"{title} - {self.title_suffix}"
        self.setWindowTitle(title)

    def apply_launch_config(self, config: LaunchConfig) -> None:
        """Apply the window related command line options."""
        self.title_suffix = config.title_bar_add
        self.tabs.tabBar().setHidden(config.no_tabbar)
        if config.always_on_top:
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)
        if config.window_x is not None or config.window_y is not None:
            self.move(
                config.window_x if config.window_x is not None else self.x(),
                config.window_y if config.window_y is not None else self.y(),
            )
        self.update_title()

    def open_files(
        self, config: LaunchConfig, working_directory: str | None = None
    ) -> list[QPlainTextEdit]:
        """
        Open every file of the launch configuration in its own tab.

        Files that do not exist yet open as empty documents. Line, column and
        position from the command line apply to each opened file.
        """
        editors = []
        for file_path in config.files:
            full_path = relative_file_path_to_full_file_path(
                file_path, working_directory
            )
            editor = self._open_file(full_path, config.read_only)
            self._go_to(
                editor, config.line_number, config.column_number, config.position
            )
            editors.append(editor)
        if editors:
            self.tabs.setCurrentWidget(editors[-1])
        return editors

    def _open_file(self, file_path: str, read_only: bool) -> QPlainTextEdit:
        for index in range(self.tabs.count()):
            editor = self.tabs.widget(index)
            if editor.property("file_path") == file_path:
                return editor

        editor = QPlainTextEdit()
        editor.setProperty("file_path", file_path)
        path = Path(file_path)
        if path.is_file():
            try:
                editor.setPlainText(path.read_text(encoding="utf-8", errors="replace"))
            except OSError as e:
                logger.error(f"Unable to read {file_path}: {e}")
        else:
            logger.info(f"{file_path} does not exist, opening an empty document")
        editor.document().setModified(False)
        editor.setReadOnly(read_only)
        index = self.tabs.addTab(editor, path.name or file_path)
        self.tabs.setTabToolTip(index, file_path)
        return editor

    @staticmethod
    def _go_to(
        editor: QPlainTextEdit,
        line: int | None,
        column: int | None,
        position: int | None,
    ) -> None:
        cursor = editor.textCursor()
        document = editor.document()
        if position is not None:
            cursor.setPosition(max(0, min(position, document.characterCount() - 1)))
        elif line is not None:
            block = document.findBlockByNumber(max(0, line - 1))
            if not block.isValid():
                block = document.lastBlock()
            target = block.position()
            if column is not None:
                target += max(0, min(column - 1, block.length() - 1))
            cursor.setPosition(target)
        else:
            return
        editor.setTextCursor(cursor)

    def minimize_to_tray(self) -> bool:
        """Hide the window behind its tray icon. False if there is no system tray."""
        if self.tray_icon is None:
            logger.warning("System tray is not available, window stays visible")
            return False
        self.tray_icon.show()
        self.hide()
        self._in_tray = True
        return True

    def restore_from_tray(self) -> bool:
        """
        Bring the window back from the tray.

        :return: True if the window was in the tray
        """
        if not self._in_tray:
            return False
        self._in_tray = False
        self.show()
        if self.tray_icon is not None:
            self.tray_icon.hide()
        self.raise_()
        self.activateWindow()
        return True

    def handle_forward_request(self, request: ForwardRequest) -> ForwardReply:
        """
        Serve a request forwarded by a secondary instance.

        The window comes back from the tray, or gets its maximized/normal state
        back if it was minimized, and is raised. Then the files are opened.
        """
        was_in_tray = False
        if request.restore:
            was_in_tray = self.restore_from_tray()
            if not was_in_tray:
                if self.isMinimized():
                    self.setWindowState(
                        (self.windowState() & ~Qt.WindowState.WindowMinimized)
                        | Qt.WindowState.WindowActive
                    )
                elif self.isMaximized():
                    self.showMaximized()
                self.raise_()
                self.activateWindow()
        self.open_files(request.config, request.working_directory or None)
        return ForwardReply(accepted=True, in_system_tray=was_in_tray)

    def unsaved_editors(self) -> list[QPlainTextEdit]:
        return [
            self.tabs.widget(index)
            for index in range(self.tabs.count())
            if self.tabs.widget(index).document().isModified()
        ]

    def emergency_save(self, folder: Path) -> bool:
        """
        Dump every unsaved document into ``folder``.

        :return: True if everything could be written, or there was nothing to save
        """
        editors = self.unsaved_editors()
        if not editors:
            return True
        try:
            folder.mkdir(parents=True, exist_ok=True)
            for number, editor in enumerate(editors, start=1):
                name = Path(editor.property("file_path")).name or "untitled"
                (folder / f"{number}_{name}").write_text(
                    editor.toPlainText(), encoding="utf-8"
                )
        except OSError as e:
            logger.error(f"Emergency save into {folder} failed: {e}")
            return False
        logger.info(f"Emergency saved {len(editors)} document(s) into {folder}")
        return True

    def closeEvent(self, event: QCloseEvent) -> None:
        if self.minimize_to_tray_enabled and self.minimize_to_tray():
            event.ignore()
            return
        super().closeEvent(event)
