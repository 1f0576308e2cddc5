import os
from pathlib import Path


def relative_file_path_to_full_file_path(
    file_path: str, working_directory: str | None = None
) -> str:
    """
    Resolve a command line file argument to an absolute path.

    Absolute paths are only normalized. Relative paths are joined onto
    ``working_directory``, or the process working directory when omitted.
    Nothing has to exist on disk.

    :param file_path: The path as typed on the command line
    :param working_directory: Directory relative paths are resolved against
    :return: The absolute, normalized path
    """
    path = Path(os.path.expanduser(file_path))
    if not path.is_absolute():
        path = Path(working_directory or os.getcwd()) / path
    return os.path.normpath(str(path))
