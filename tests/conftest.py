import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, Generator, Union
from unittest.mock import MagicMock, patch

import pytest
from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication, QDialog, QMessageBox

from quire.utils.app_info import AppInfo

# Tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def auto_accept_dialogs(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically accept all dialog exec calls during tests to prevent blocking.
    """

    def fake_exec(self: QDialog) -> int:
        # Return QDialog.Accepted constant value 1
        return 1

    monkeypatch.setattr(QDialog, "exec", fake_exec)
    monkeypatch.setattr(QMessageBox, "exec", fake_exec)


@pytest.fixture(autouse=True)
def isolated_app_info(tmp_path: Path) -> Generator[AppInfo, None, None]:
    """
    Point the AppInfo singleton at a temporary storage and log folder.
    """
    platform_dirs = MagicMock()
    platform_dirs.user_data_dir = str(tmp_path / "storage")
    platform_dirs.user_log_dir = str(tmp_path / "logs")
    AppInfo.release()
    with patch("quire.utils.app_info.PlatformDirs", return_value=platform_dirs):
        yield AppInfo()
    AppInfo.release()


@pytest.fixture(scope="function")
def qapp() -> Generator[Union[QApplication, QCoreApplication], None, None]:
    """Create a QApplication instance for Qt tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def primary_process() -> Generator[Callable[[str, str], subprocess.Popen], None, None]:
    """
    Start primary instance endpoints in separate processes.

    Returns a factory taking the server name and the mode ("reply" or
    "silent"). It waits until the endpoint listens.
    """
    script = Path(__file__).parent / "primary_server_process.py"
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(Path(__file__).parent.parent), env.get("PYTHONPATH")])
    )
    processes: list[subprocess.Popen] = []

    def start(server_name: str, mode: str = "reply") -> subprocess.Popen:
        process = subprocess.Popen(
            [sys.executable, str(script), server_name, mode],
            stdout=subprocess.PIPE,
            text=True,
            env=env,
        )
        processes.append(process)
        assert process.stdout is not None
        assert process.stdout.readline().strip() == "ready"
        return process

    yield start

    for process in processes:
        process.kill()
        process.wait(timeout=10)
        if process.stdout is not None:
            process.stdout.close()
