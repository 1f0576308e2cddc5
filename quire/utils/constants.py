from enum import Enum

APP_NAME = "Quire"

# Named lock and local server identifying the primary instance
INSTANCE_LOCK_NAME = "quireInstance"
MAIN_WINDOW_CLASS_NAME = "Quire_Main_Window"

# Instance search defaults, overridable from settings
INSTANCE_SEARCH_RETRIES = 5
INSTANCE_SEARCH_DELAY_MS = 100
INSTANCE_CONNECT_TIMEOUT_MS = 100
INSTANCE_REPLY_TIMEOUT_MS = 1000

EMERGENCY_SAVE_FOLDER_NAME = "Quire RECOV"

# Tokenizer literals
QUOTE_CHAR = '"'
WHITESPACE_CHARS = (" ", "\t")
PASSTHROUGH_FLAG = "-z"
NOTEPAD_PRINT_FLAGS = ("/p", "/P")

# Presence flags
FLAG_HELP = "--help"
FLAG_MULTI_INSTANCE = "-multiInst"
FLAG_NO_PLUGIN = "-noPlugin"
FLAG_READONLY = "-ro"
FLAG_NOSESSION = "-nosession"
FLAG_NOTABBAR = "-notabbar"
FLAG_SYSTRAY = "-systemtray"
FLAG_LOADINGTIME = "-loadingTime"
FLAG_ALWAYS_ON_TOP = "-alwaysOnTop"
FLAG_OPENSESSIONFILE = "-openSession"
FLAG_RECURSIVE = "-r"
FLAG_OPEN_FOLDERS_AS_WORKSPACE = "-openFoldersAsWorkspace"
FLAG_MONITOR_FILES = "-monitor"
FLAG_FUNCLSTEXPORT = "-export=functionList"
FLAG_PRINTANDQUIT = "-quickPrint"
FLAG_NOTEPAD_COMPATIBILITY = "-notepadStyleCmdline"

# Prefix-style ("=") flags
FLAG_SETTINGS_DIR = "-settingsDir="
FLAG_TITLEBAR_ADD = "-titleAdd="
FLAG_APPLY_UDL = "-udl="
FLAG_PLUGIN_MESSAGE = "-pluginMessage="
FLAG_EASTER_EGG_NAME = "-qn="
FLAG_EASTER_EGG_TEXT = "-qt="
FLAG_EASTER_EGG_FILE = "-qf="
FLAG_GHOST_TYPING_SPEED = "-qSpeed"

# Single-letter valued flags
PARAM_LANGUAGE = "l"
PARAM_LOCALIZATION = "L"
PARAM_LINE = "n"
PARAM_COLUMN = "c"
PARAM_POSITION = "p"
PARAM_WINDOW_X = "x"
PARAM_WINDOW_Y = "y"

GHOST_TYPING_SPEED_MIN = 1
GHOST_TYPING_SPEED_MAX = 3

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

COMMAND_ARG_HELP = """Usage :
quire [--help] [-multiInst] [-noPlugin] [-lLanguage] [-LLangCode] [-nLineNumber]
[-cColumnNumber] [-pPosition] [-xLeftPos] [-yTopPos] [-monitor] [-nosession]
[-notabbar] [-ro] [-systemtray] [-loadingTime] [-alwaysOnTop]
[-openSession] [-r] [-qn="Easter egg name" | -qt="a text to display." |
-qf="D:\\my quote.txt"] [-qSpeed1|2|3] [-quickPrint] [-settingsDir="d:\\your settings dir\\"]
[-openFoldersAsWorkspace] [-titleAdd="additional title bar text"] [-udl="My UDL Name"]
[-pluginMessage="text to send to plugins"] [filePath]

--help : This help message
-multiInst : Launch another instance
-noPlugin : Launch without loading any plugin
-l : Open file or display ghost typing with syntax highlighting of choice
-L : Apply indicated localization, LangCode is browser language code
-n : Scroll to indicated line on filePath
-c : Scroll to indicated column on filePath
-p : Scroll to indicated position on filePath
-x : Move the window to indicated left side position on the screen
-y : Move the window to indicated top position on the screen
-nosession : Launch without previous session
-notabbar : Launch without tab bar
-ro : Make the filePath read only
-systemtray : Launch in system tray
-loadingTime : Display startup time
-alwaysOnTop : Make the window always on top
-openSession : Open a session. filePath must be a session file
-r : Open files recursively. This argument will be ignored
     if filePath contains no wildcard character
-qn : Launch ghost typing to display easter egg via its name
-qt : Launch ghost typing to display a text via the given text
-qf : Launch ghost typing to display a file content via the file path
-qSpeed : Ghost typing speed. Value from 1 to 3 for slow, fast and fastest
-quickPrint : Print the file given as argument then quit
-settingsDir : Override the default settings dir
-openFoldersAsWorkspace : Open filePath of folder(s) as workspace
-titleAdd : Add string to the title bar
-udl : Apply the given user defined language to the opened files
-pluginMessage : Send the given text to plugins
filePath : file or folder name to open (absolute or relative path name)
"""


class TokenizerState(Enum):
    WHITESPACE = "whitespace"
    UNQUOTED_TOKEN = "unquoted_token"
    QUOTED_ARGUMENT = "quoted_argument"
    INLINE_QUOTED_VALUE = "inline_quoted_value"
    AFTER_QUOTED_ARGUMENT = "after_quoted_argument"


class InstanceRole(str, Enum):
    PRIMARY = "Primary"
    SECONDARY = "Secondary"


class CoordinationOutcome(str, Enum):
    PROCEED_AS_PRIMARY = "ProceedAsPrimary"
    FORWARD_AND_EXIT = "ForwardAndExit"


class EasterEggKind(str, Enum):
    NAMED = "named"
    TEXT = "text"
    FILE = "file"
