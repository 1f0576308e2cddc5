import re
from typing import Iterable, Iterator

from quire.utils.constants import INT64_MAX, INT64_MIN, PASSTHROUGH_FLAG

# ASCII digits with an optional minus sign
_DECIMAL_PATTERN = re.compile(r"-?[0-9]+")


def parse_decimal(value: str) -> int | None:
    """Parse a signed 64-bit base-10 integer, None if ``value`` is anything else."""
    if _DECIMAL_PATTERN.fullmatch(value) is None:
        return None
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        return None
    return number


class ParamStore:
    """
    Owns the token list produced by the tokenizer and hands out flags from it.

    Every successful lookup removes the token it matched, so a flag can only be
    read once and later lookups never see consumed tokens. ``None`` always means
    "flag absent" and is distinct from an empty value.

    Examples:
        >>> store = ParamStore(["-ro", "-lcpp", "main.cpp"])
        >>> store.contains_flag("-ro")
        True
        >>> store.take_value("l")
        'cpp'
        >>> store.take_value("l") is None
        True
        >>> store.drain()
        ['main.cpp']
    """

    def __init__(self, tokens: Iterable[str]) -> None:
        self._params: list[str] = list(tokens)

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._params))

    @property
    def remaining(self) -> tuple[str, ...]:
        """Tokens not consumed so far."""
        return tuple(self._params)

    def contains_flag(self, literal: str, consume: bool = True) -> bool:
        """
        Check for a token exactly equal to ``literal``.

        :param literal: The flag, e.g. ``-ro``
        :param consume: Remove the matched token. Pass False to only peek.
        :return: True if the flag is present
        """
        try:
            index = self._params.index(literal)
        except ValueError:
            return False
        if consume:
            del self._params[index]
        return True

    def take_value(self, short_code: str) -> str | None:
        """
        Take the first ``-<short_code><value>`` token and return ``<value>``.

        :param short_code: Single character following the dash
        :return: The (possibly empty) value, or None if no token matched
        """
        return self.take_value_by_prefix(f"-{short_code}")

    def take_value_by_prefix(self, prefix: str) -> str | None:
        """Take the first token starting with ``prefix`` and return the rest of it."""
        for index, token in enumerate(self._params):
            if token.startswith(prefix):
                del self._params[index]
                return token[len(prefix) :]
        return None

    def take_numeric(self, short_code: str) -> int | None:
        """
        Take a ``-<short_code><number>`` token as a signed 64-bit integer.

        The token is consumed even when its value does not parse; a missing,
        malformed or out-of-range number resolves to None.
        """
        value = self.take_value(short_code)
        if value is None:
            return None
        return parse_decimal(value)

    def strip_ignored(self, flag: str = PASSTHROUGH_FLAG) -> None:
        """Remove every ``flag`` token together with the argument right after it."""
        kept: list[str] = []
        skip_next = False
        for token in self._params:
            if skip_next:
                skip_next = False
                continue
            if token == flag:
                skip_next = True
                continue
            kept.append(token)
        self._params = kept

    def drain(self) -> list[str]:
        """Hand over every unconsumed token and leave the store empty."""
        params, self._params = self._params, []
        return params
