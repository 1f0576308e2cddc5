from typing import Any

from loguru import logger


def apply_window_launch_state(
    window: Any, launch_state: str, start_in_tray: bool = False
) -> None:
    """
    Show the main window the way the settings and command line ask for.

    Args:
        window: The main window to show.
        launch_state: The launch state string ("maximized" or "normal").
        start_in_tray: Start hidden with only the tray icon visible.
    """
    if start_in_tray and window.minimize_to_tray():
        return
    if launch_state == "maximized":
        window.showMaximized()
    elif launch_state == "normal":
        window.showNormal()
    else:
        logger.warning(f"Unknown window launch state: {launch_state}")
        window.show()
