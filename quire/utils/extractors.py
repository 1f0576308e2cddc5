"""
Resolve the compound command line options on top of ParamStore.

``parse_command_line`` is the single entry point used at startup: it runs the
tokenizer, consumes every known flag in a fixed order and returns a
LaunchConfig. The order matters, since single-letter lookups such as ``-l`` or
``-n`` would otherwise eat longer flags (``-loadingTime``, ``-nosession``).
"""

from loguru import logger

from quire.models.launch_config import EasterEgg, LaunchConfig
from quire.utils.command_line import rewrite_notepad_print_flag, tokenize
from quire.utils.constants import (
    FLAG_ALWAYS_ON_TOP,
    FLAG_APPLY_UDL,
    FLAG_EASTER_EGG_FILE,
    FLAG_EASTER_EGG_NAME,
    FLAG_EASTER_EGG_TEXT,
    FLAG_FUNCLSTEXPORT,
    FLAG_GHOST_TYPING_SPEED,
    FLAG_HELP,
    FLAG_LOADINGTIME,
    FLAG_MONITOR_FILES,
    FLAG_MULTI_INSTANCE,
    FLAG_NO_PLUGIN,
    FLAG_NOSESSION,
    FLAG_NOTABBAR,
    FLAG_NOTEPAD_COMPATIBILITY,
    FLAG_OPEN_FOLDERS_AS_WORKSPACE,
    FLAG_OPENSESSIONFILE,
    FLAG_PLUGIN_MESSAGE,
    FLAG_PRINTANDQUIT,
    FLAG_READONLY,
    FLAG_RECURSIVE,
    FLAG_SETTINGS_DIR,
    FLAG_SYSTRAY,
    FLAG_TITLEBAR_ADD,
    GHOST_TYPING_SPEED_MAX,
    GHOST_TYPING_SPEED_MIN,
    PARAM_COLUMN,
    PARAM_LANGUAGE,
    PARAM_LINE,
    PARAM_LOCALIZATION,
    PARAM_POSITION,
    PARAM_WINDOW_X,
    PARAM_WINDOW_Y,
    PASSTHROUGH_FLAG,
    QUOTE_CHAR,
    EasterEggKind,
)
from quire.utils.files import relative_file_path_to_full_file_path
from quire.utils.languages import (
    LangType,
    lang_type_from_name,
    localization_path_from_code,
)
from quire.utils.param_store import ParamStore, parse_decimal

# Checked in this order, first match wins
_EASTER_EGG_FLAGS = (
    (FLAG_EASTER_EGG_NAME, EasterEggKind.NAMED),
    (FLAG_EASTER_EGG_TEXT, EasterEggKind.TEXT),
    (FLAG_EASTER_EGG_FILE, EasterEggKind.FILE),
)


def take_lang_type(params: ParamStore) -> LangType:
    """``-l<name>``: syntax language, LangType.EXTERNAL when absent."""
    lang_name = params.take_value(PARAM_LANGUAGE)
    if lang_name is None:
        return LangType.EXTERNAL
    return lang_type_from_name(lang_name)


def take_localization_path(params: ParamStore) -> str:
    """``-L<code>``: localization file path, empty when absent or unknown."""
    code = params.take_value(PARAM_LOCALIZATION)
    if code is None:
        return ""
    # Lower case with "-" as separator, so fr_FR and FR-fr both become fr-fr
    return localization_path_from_code(code.replace("_", "-").lower())


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == QUOTE_CHAR and value[-1] == QUOTE_CHAR:
        return value[1:-1]
    return value


def take_easter_egg(
    params: ParamStore, working_directory: str | None = None
) -> EasterEgg | None:
    """
    Take one of ``-qn=``, ``-qt=`` or ``-qf=``, in that priority order.

    One layer of surrounding quotes is removed from the value. For ``-qf=``
    the value is a file path and is made absolute.

    :return: The matched variant and its payload, or None if none is present
    """
    for prefix, kind in _EASTER_EGG_FLAGS:
        value = params.take_value_by_prefix(prefix)
        if value is None:
            continue
        value = _strip_quotes(value)
        if kind is EasterEggKind.FILE:
            value = relative_file_path_to_full_file_path(value, working_directory)
        return EasterEgg(kind=kind, payload=value)
    return None


def take_ghost_typing_speed(params: ParamStore) -> int | None:
    """``-qSpeed<1-3>``: anything unparsable or out of range is treated as absent."""
    value = params.take_value_by_prefix(FLAG_GHOST_TYPING_SPEED)
    if value is None:
        return None
    speed = parse_decimal(value)
    if speed is None:
        return None
    if not GHOST_TYPING_SPEED_MIN <= speed <= GHOST_TYPING_SPEED_MAX:
        return None
    return speed


def parse_command_line(
    raw_line: str, working_directory: str | None = None
) -> LaunchConfig:
    """
    Turn a raw command line into a LaunchConfig.

    Never raises for malformed input: bad values resolve to their "absent"
    defaults and unknown tokens end up in ``files``.

    :param raw_line: The command line without the program name
    :param working_directory: Directory relative file arguments are resolved
        against, the process working directory by default
    :return: The resolved launch configuration
    """
    tokens = tokenize(raw_line)
    rewrite_notepad_print_flag(tokens)
    params = ParamStore(tokens)

    config = LaunchConfig(
        show_help=params.contains_flag(FLAG_HELP),
        multi_instance=params.contains_flag(FLAG_MULTI_INSTANCE),
        no_plugins=params.contains_flag(FLAG_NO_PLUGIN),
        read_only=params.contains_flag(FLAG_READONLY),
        no_session=params.contains_flag(FLAG_NOSESSION),
        no_tabbar=params.contains_flag(FLAG_NOTABBAR),
        system_tray=params.contains_flag(FLAG_SYSTRAY),
        show_loading_time=params.contains_flag(FLAG_LOADINGTIME),
        always_on_top=params.contains_flag(FLAG_ALWAYS_ON_TOP),
        open_session=params.contains_flag(FLAG_OPENSESSIONFILE),
        recursive=params.contains_flag(FLAG_RECURSIVE),
        open_folders_as_workspace=params.contains_flag(FLAG_OPEN_FOLDERS_AS_WORKSPACE),
        monitor_files=params.contains_flag(FLAG_MONITOR_FILES),
        export_function_list=params.contains_flag(FLAG_FUNCLSTEXPORT),
        quick_print=params.contains_flag(FLAG_PRINTANDQUIT),
        notepad_style_cmdline=params.contains_flag(FLAG_NOTEPAD_COMPATIBILITY),
    )

    # -z and the argument it guards are never looked at again
    params.strip_ignored(PASSTHROUGH_FLAG)

    config.settings_dir = params.take_value_by_prefix(FLAG_SETTINGS_DIR) or ""
    config.title_bar_add = params.take_value_by_prefix(FLAG_TITLEBAR_ADD) or ""
    config.udl_name = params.take_value_by_prefix(FLAG_APPLY_UDL) or ""
    config.plugin_message = params.take_value_by_prefix(FLAG_PLUGIN_MESSAGE) or ""
    config.easter_egg = take_easter_egg(params, working_directory)
    config.ghost_typing_speed = take_ghost_typing_speed(params)

    config.lang_type = take_lang_type(params)
    config.localization_path = take_localization_path(params)

    # Numbers last so they cannot consume the other params
    config.line_number = params.take_numeric(PARAM_LINE)
    config.column_number = params.take_numeric(PARAM_COLUMN)
    config.position = params.take_numeric(PARAM_POSITION)
    config.window_x = params.take_numeric(PARAM_WINDOW_X)
    config.window_y = params.take_numeric(PARAM_WINDOW_Y)

    if config.quick_print or config.export_function_list:
        config.multi_instance = True
        config.no_session = True

    config.files = [
        relative_file_path_to_full_file_path(param, working_directory)
        for param in params.drain()
        if param
    ]

    if config.open_session:
        if len(config.files) == 1:
            config.session_file = config.files.pop()
        else:
            logger.warning(
                f"{FLAG_OPENSESSIONFILE} expects exactly one session file, got {len(config.files)}"
            )

    logger.debug(f"Parsed command line {tokens} into {config}")
    return config
