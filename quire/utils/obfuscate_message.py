"""
Used by the loguru formatter to keep user names out of log files.

Command lines are logged in full, so every file path a user passes ends up in
the log; the home directory part of those paths is masked.
"""

import re

_WINDOWS_PROFILE = re.compile(r"([A-Za-z]:\\Users\\)[^\\]+(\\|$)")
_MACOS_HOME = re.compile(r"(/Users/)[^/]+(/|$)")
_LINUX_HOME = re.compile(r"(/home/)[^/]+(/|$)")


def obfuscate_message(message: str, anonymize_path: bool = True) -> str:
    """
    Obfuscate the message such that it does not reveal user information.

    Args:
        message: The message to obfuscate.
        anonymize_path: Whether to mask the user name in paths.

    Returns:
        The obfuscated message.
    """
    if anonymize_path:
        message = _anonymize_path(message)
    return message


def _anonymize_path(message: str) -> str:
    # Keep drive letters and the separator, drop only the user name
    message = _WINDOWS_PROFILE.sub(r"\1...\2", message)
    message = _MACOS_HOME.sub(r"\1...\2", message)
    message = _LINUX_HOME.sub(r"\1...\2", message)
    return message
