import msgspec

from quire.utils.constants import EasterEggKind
from quire.utils.languages import LangType


class EasterEgg(msgspec.Struct, frozen=True):
    """
    Ghost typing content requested with ``-qn=``, ``-qt=`` or ``-qf=``.

    ``payload`` is the easter egg name, the literal text, or the absolute path
    of the file to read the text from, depending on ``kind``.
    """

    kind: EasterEggKind
    payload: str


class LaunchConfig(msgspec.Struct):
    """
    Everything the command line asked for, resolved and ready for bootstrap.

    Pure data class. It is either handed to the application controller or,
    on a secondary instance, serialized and forwarded to the primary one.
    Numeric overrides are None when absent, strings are empty when absent.
    """

    show_help: bool = False
    multi_instance: bool = False
    no_plugins: bool = False
    read_only: bool = False
    no_session: bool = False
    no_tabbar: bool = False
    system_tray: bool = False
    show_loading_time: bool = False
    always_on_top: bool = False
    open_session: bool = False
    recursive: bool = False
    open_folders_as_workspace: bool = False
    monitor_files: bool = False
    export_function_list: bool = False
    quick_print: bool = False
    notepad_style_cmdline: bool = False

    lang_type: LangType = LangType.EXTERNAL
    localization_path: str = ""

    line_number: int | None = None
    column_number: int | None = None
    position: int | None = None
    window_x: int | None = None
    window_y: int | None = None
    ghost_typing_speed: int | None = None

    settings_dir: str = ""
    title_bar_add: str = ""
    udl_name: str = ""
    plugin_message: str = ""

    easter_egg: EasterEgg | None = None
    session_file: str = ""
    files: list[str] = msgspec.field(default_factory=list)
