from loguru import logger
from PySide6.QtCore import QCoreApplication, Qt, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QStyle,
    QVBoxLayout,
    QWidget,
)

from quire.utils.app_info import AppInfo
from quire.utils.constants import APP_NAME


def _show_message_box(
    icon: QMessageBox.Icon,
    title: str | None,
    text: str | None,
    information: str | None,
    details: str | None,
    parent: QWidget | None = None,
) -> None:
    message_box = QMessageBox(parent)
    message_box.setObjectName("dialogue")
    message_box.setTextFormat(Qt.TextFormat.RichText)
    message_box.setIcon(icon)
    message_box.setWindowTitle(title or APP_NAME)
    message_box.setStandardButtons(QMessageBox.StandardButton.Ok)
    message_box.button(QMessageBox.StandardButton.Ok).setText(
        QCoreApplication.translate("dialogue", "OK")
    )
    if text:
        message_box.setText(text)
    if information:
        message_box.setInformativeText(information)
    if details:
        # Collapsed behind the "Show Details..." button
        message_box.setDetailedText(details)
    message_box.exec()


def show_information(
    title: str | None = None,
    text: str | None = None,
    information: str | None = None,
    details: str | None = None,
    parent: QWidget | None = None,
) -> None:
    """
    Show a modal information box.

    :param title: Window title, the application name when omitted
    :param text: Short text description
    :param information: Long form information
    :param details: Text hidden behind the details button
    :param parent: The parent widget
    """
    logger.info(f"Showing information box: [{title}], [{text}], [{information}]")
    _show_message_box(
        QMessageBox.Icon.Information, title, text, information, details, parent
    )


def show_warning(
    title: str | None = None,
    text: str | None = None,
    information: str | None = None,
) -> None:
    """Show a modal warning box. Same parameters as show_information."""
    logger.info(f"Showing warning box: [{title}], [{text}], [{information}]")
    _show_message_box(QMessageBox.Icon.Warning, title, text, information, None)


def show_fatal_error(
    title: str = "Fatal Error",
    text: str = "A fatal error has occurred!",
    information: str = "Please report the error to the developers.",
    details: str = "",
) -> None:
    """
    Show the fatal error dialogue. Used when startup or the main loop
    dies on an exception; ``details`` usually carries the traceback.
    """
    logger.info(f"Showing fatal error box: [{title}], [{text}], [{information}]")
    FatalErrorDialog(title, text, information, details).exec()


class FatalErrorDialog(QDialog):
    """Fatal error message with a collapsible traceback and a shortcut to the logs."""

    def __init__(
        self,
        title: str = "Fatal Error",
        text: str = "A fatal error has occurred!",
        information: str = "Please report the error to the developers.",
        details: str = "",
    ) -> None:
        super().__init__()
        self.setObjectName("dialogue")
        self.setWindowTitle(title)
        self.setModal(True)

        icon = QLabel()
        icon.setPixmap(
            self.style()
            .standardIcon(QStyle.StandardPixmap.SP_MessageBoxCritical)
            .pixmap(48, 48)
        )

        self.details_btn = QPushButton(self.tr("Show Details"))
        self.open_log_btn = QPushButton(self.tr("Open Log Directory"))
        self.close_btn = QPushButton(self.tr("Close"))

        buttons = QHBoxLayout()
        for button in (self.details_btn, self.open_log_btn, self.close_btn):
            buttons.addWidget(button)

        messages = QVBoxLayout()
        for message in (text, information):
            label = QLabel(message)
            label.setWordWrap(True)
            messages.addWidget(label)
        messages.addLayout(buttons)

        header = QHBoxLayout()
        header.setAlignment(Qt.AlignmentFlag.AlignLeft)
        header.addWidget(icon)
        header.addLayout(messages)

        self.details_edit = QPlainTextEdit(details)
        self.details_edit.setReadOnly(True)
        self.details_edit.setMaximumHeight(150)
        self.details_edit.setHidden(True)

        layout = QVBoxLayout(self)
        layout.addLayout(header)
        layout.addWidget(self.details_edit)

        self.details_btn.clicked.connect(self._toggle_details)
        self.open_log_btn.clicked.connect(self._open_log_directory)
        self.close_btn.clicked.connect(self.close)

    def _toggle_details(self) -> None:
        show = self.details_edit.isHidden()
        self.details_edit.setHidden(not show)
        self.details_btn.setText(
            self.tr("Hide Details") if show else self.tr("Show Details")
        )
        self.adjustSize()

    def _open_log_directory(self) -> None:
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(AppInfo().user_log_folder)))
