"""
Lookups behind the ``-l`` (syntax language) and ``-L`` (UI localization) flags.
"""

from enum import Enum
from pathlib import Path

from loguru import logger

from quire.utils.app_info import AppInfo


class LangType(str, Enum):
    """Syntax highlighting languages. EXTERNAL means "not chosen on the command line"."""

    EXTERNAL = "external"
    TEXT = "normal"
    PHP = "php"
    C = "c"
    CPP = "cpp"
    CS = "cs"
    OBJC = "objc"
    JAVA = "java"
    RC = "rc"
    HTML = "html"
    XML = "xml"
    MAKEFILE = "makefile"
    PASCAL = "pascal"
    BATCH = "batch"
    INI = "ini"
    NFO = "nfo"
    JS = "javascript"
    JSON = "json"
    CSS = "css"
    PERL = "perl"
    PYTHON = "python"
    LUA = "lua"
    TEX = "tex"
    FORTRAN = "fortran"
    BASH = "bash"
    NSIS = "nsis"
    TCL = "tcl"
    LISP = "lisp"
    SCHEME = "scheme"
    ASM = "asm"
    DIFF = "diff"
    PROPS = "props"
    POSTSCRIPT = "postscript"
    RUBY = "ruby"
    SMALLTALK = "smalltalk"
    VHDL = "vhdl"
    VERILOG = "verilog"
    MATLAB = "matlab"
    HASKELL = "haskell"
    INNO = "inno"
    CMAKE = "cmake"
    YAML = "yaml"
    COBOL = "cobol"
    D = "d"
    POWERSHELL = "powershell"
    R = "r"
    COFFEESCRIPT = "coffeescript"
    RUST = "rust"
    GO = "go"
    SWIFT = "swift"
    TYPESCRIPT = "typescript"
    SQL = "sql"
    MARKDOWN = "markdown"
    TOML = "toml"


# Alternative spellings accepted on the command line
_LANG_ALIASES = {
    "text": LangType.TEXT,
    "txt": LangType.TEXT,
    "c++": LangType.CPP,
    "c#": LangType.CS,
    "js": LangType.JS,
    "py": LangType.PYTHON,
    "sh": LangType.BASH,
    "shell": LangType.BASH,
    "ps1": LangType.POWERSHELL,
    "ts": LangType.TYPESCRIPT,
    "md": LangType.MARKDOWN,
    "yml": LangType.YAML,
}

# Browser language code -> localization file name
LOCALIZATION_FILES = {
    "en": "english.xml",
    "en-us": "english.xml",
    "en-gb": "english.xml",
    "fr": "french.xml",
    "fr-fr": "french.xml",
    "fr-ca": "french.xml",
    "de": "german.xml",
    "de-de": "german.xml",
    "de-at": "german.xml",
    "es": "spanish.xml",
    "es-es": "spanish.xml",
    "it": "italian.xml",
    "it-it": "italian.xml",
    "nl": "dutch.xml",
    "pl": "polish.xml",
    "pt": "portuguese.xml",
    "pt-pt": "portuguese.xml",
    "pt-br": "brazilian_portuguese.xml",
    "ru": "russian.xml",
    "tr": "turkish.xml",
    "ja": "japanese.xml",
    "ko": "korean.xml",
    "ko-kr": "korean.xml",
    "zh": "chineseSimplified.xml",
    "zh-cn": "chineseSimplified.xml",
    "zh-sg": "chineseSimplified.xml",
    "zh-tw": "taiwaneseMandarin.xml",
    "zh-hk": "taiwaneseMandarin.xml",
}


def lang_type_from_name(name: str) -> LangType:
    """
    Resolve a language name given with ``-l`` (case-insensitive).

    Unknown names resolve to LangType.EXTERNAL, as if the flag was not given.
    """
    key = name.strip().lower()
    if key in _LANG_ALIASES:
        return _LANG_ALIASES[key]
    try:
        return LangType(key)
    except ValueError:
        logger.debug(f"Unknown language name on command line: {name}")
        return LangType.EXTERNAL


def localization_path_from_code(code: str, folder: Path | None = None) -> str:
    """
    Resolve a normalized browser language code (``fr-fr``) to a localization file.

    :param code: Lower-case code using ``-`` as separator
    :param folder: Folder holding the localization files, AppInfo's by default
    :return: The file path, or an empty string if the code is unknown or
        the file is not installed
    """
    file_name = LOCALIZATION_FILES.get(code)
    if file_name is None:
        logger.debug(f"No localization known for code: {code}")
        return ""
    if folder is None:
        folder = AppInfo().localization_folder
    path = folder / file_name
    if not path.is_file():
        logger.warning(f"Localization file not found: {path}")
        return ""
    return str(path)
