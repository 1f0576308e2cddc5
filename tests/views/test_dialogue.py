from pathlib import Path
from unittest.mock import patch

from PySide6.QtWidgets import QApplication, QMessageBox

from quire.utils.app_info import AppInfo
from quire.views.dialogue import (
    FatalErrorDialog,
    show_fatal_error,
    show_information,
    show_warning,
)


def test_show_information(qapp: QApplication) -> None:
    with patch.object(QMessageBox, "setDetailedText") as mock_details:
        show_information(title="Quire", text="Command line arguments", details="help")
    mock_details.assert_called_once_with("help")


def test_show_warning(qapp: QApplication) -> None:
    with patch.object(QMessageBox, "setInformativeText") as mock_information:
        show_warning(text="Recovery failure", information="Sorry")
    mock_information.assert_called_once_with("Sorry")


def test_show_fatal_error(qapp: QApplication) -> None:
    with patch("quire.views.dialogue.FatalErrorDialog") as mock_dialog:
        show_fatal_error(details="Traceback")
    mock_dialog.assert_called_once()
    assert mock_dialog.call_args.args[3] == "Traceback"
    mock_dialog.return_value.exec.assert_called_once()


class TestFatalErrorDialog:
    def test_details_are_hidden_by_default(self, qapp: QApplication) -> None:
        dialog = FatalErrorDialog(details="Traceback")
        assert dialog.details_edit.isHidden() is True
        assert dialog.details_edit.toPlainText() == "Traceback"

    def test_toggle_details(self, qapp: QApplication) -> None:
        dialog = FatalErrorDialog(details="Traceback")

        dialog.details_btn.click()
        assert dialog.details_edit.isHidden() is False
        assert dialog.details_btn.text() == "Hide Details"

        dialog.details_btn.click()
        assert dialog.details_edit.isHidden() is True
        assert dialog.details_btn.text() == "Show Details"

    def test_open_log_directory(
        self, qapp: QApplication, isolated_app_info: AppInfo
    ) -> None:
        dialog = FatalErrorDialog()
        with patch("quire.views.dialogue.QDesktopServices.openUrl") as mock_open:
            dialog.open_log_btn.click()
        mock_open.assert_called_once()
        assert (
            Path(mock_open.call_args.args[0].toLocalFile())
            == isolated_app_info.user_log_folder
        )
