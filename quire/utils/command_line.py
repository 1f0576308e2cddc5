"""
Tokenizer for raw editor command lines.

The quoting grammar is intentionally narrower than a shell's: a double quote
either delimits a whole argument or, directly after ``=``, wraps an inline
value (``-settingsDir="C:\\my settings"``). There are no escapes and no
nesting. The ``-z`` flag makes the argument after it pass through untouched
and swallows the remainder of the line as a single token, which is what a
"replace the stock editor" registration hands us.

Examples:
    >>> tokenize('-flag="a b c" file.txt')
    ['-flag=a b c', 'file.txt']

    >>> tokenize('-notepadStyleCmdline -z "/usr/bin/notepad" /tmp/my file.txt')
    ['-notepadStyleCmdline', '-z', '/usr/bin/notepad', '/tmp/my file.txt']
"""

import sys
from typing import Sequence

from quire.utils.constants import (
    FLAG_PRINTANDQUIT,
    NOTEPAD_PRINT_FLAGS,
    PASSTHROUGH_FLAG,
    QUOTE_CHAR,
    WHITESPACE_CHARS,
    TokenizerState,
)

_QUOTED_STATES = (
    TokenizerState.QUOTED_ARGUMENT,
    TokenizerState.INLINE_QUOTED_VALUE,
)


def tokenize(raw_line: str) -> list[str]:
    """
    Split a raw command line into argument tokens.

    Edge cases:
        - Empty input yields an empty list
        - ``""`` yields an empty token, which is preserved
        - An unmatched quote keeps its mode engaged until the end of the line
        - Characters glued to a closing quote (``"a"b``) belong to no token
        - Once ``-z`` and a quoted argument have been seen, the next unquoted
          token and everything after it is kept verbatim as the last token

    :param raw_line: The command line, without the program name
    :return: Tokens in their original left-to-right order
    """
    tokens: list[str] = []
    current: list[str] | None = None
    state = TokenizerState.WHITESPACE
    # State to go back to once an inline ="..." value is closed
    resume_state = TokenizerState.UNQUOTED_TOKEN
    passthrough_stage = 0

    for index, char in enumerate(raw_line):
        if char == QUOTE_CHAR:
            if (
                state not in _QUOTED_STATES
                and index > 0
                and raw_line[index - 1] == "="
            ):
                resume_state = state
                state = TokenizerState.INLINE_QUOTED_VALUE
            elif state is TokenizerState.INLINE_QUOTED_VALUE:
                state = resume_state
            elif state is not TokenizerState.QUOTED_ARGUMENT:
                if current is not None:
                    tokens.append("".join(current))
                current = []
                state = TokenizerState.QUOTED_ARGUMENT
                if passthrough_stage == 1:
                    passthrough_stage = 2
            else:
                if current is not None:
                    tokens.append("".join(current))
                current = None
                state = TokenizerState.AFTER_QUOTED_ARGUMENT

        elif char in WHITESPACE_CHARS:
            if state in _QUOTED_STATES:
                if current is not None:
                    current.append(char)
                continue
            if current is not None:
                tokens.append("".join(current))
                current = None
            state = TokenizerState.WHITESPACE
            if passthrough_stage == 0 and tokens and tokens[-1] == PASSTHROUGH_FLAG:
                passthrough_stage = 1

        elif state is TokenizerState.WHITESPACE:
            if passthrough_stage == 2:
                tokens.append(raw_line[index:])
                return tokens
            current = [char]
            state = TokenizerState.UNQUOTED_TOKEN

        elif current is not None:
            current.append(char)

    if current is not None:
        tokens.append("".join(current))
    return tokens


def join_arguments(args: Sequence[str]) -> str:
    """
    Rebuild a raw command line from arguments the interpreter already split.

    Arguments that are empty or contain whitespace are wrapped in quotes, so
    ``tokenize(join_arguments(args))`` gives ``args`` back for anything that
    does not itself contain a quote character.
    """
    parts = []
    for arg in args:
        if not arg or any(ws in arg for ws in WHITESPACE_CHARS):
            parts.append(f"{QUOTE_CHAR}{arg}{QUOTE_CHAR}")
        else:
            parts.append(arg)
    return " ".join(parts)


def _strip_program_name(command_line: str) -> str:
    command_line = command_line.lstrip("".join(WHITESPACE_CHARS))
    if command_line.startswith(QUOTE_CHAR):
        end = command_line.find(QUOTE_CHAR, 1)
        rest = "" if end == -1 else command_line[end + 1 :]
    else:
        ends = [command_line.find(ws) for ws in WHITESPACE_CHARS]
        ends = [end for end in ends if end != -1]
        rest = command_line[min(ends) :] if ends else ""
    return rest.lstrip("".join(WHITESPACE_CHARS))


def raw_command_line(argv: Sequence[str]) -> str:
    """
    Get the command line this process was started with, minus the program name.

    A frozen Windows build reads the unsplit line from GetCommandLineW, so the
    ``-z`` passthrough sees exactly what the caller typed. Everywhere else the
    line is rebuilt from ``argv``.
    """
    if sys.platform == "win32" and (
        getattr(sys, "frozen", False) or "__compiled__" in globals()
    ):
        import ctypes

        get_command_line = ctypes.windll.kernel32.GetCommandLineW
        get_command_line.restype = ctypes.c_wchar_p
        return _strip_program_name(get_command_line() or "")
    return join_arguments(argv[1:])


def rewrite_notepad_print_flag(params: list[str]) -> None:
    """Turn a leading ``/p`` or ``/P`` into ``-quickPrint``, in place."""
    if params and params[0] in NOTEPAD_PRINT_FLAGS:
        params[0] = FLAG_PRINTANDQUIT
