"""Line reader and token helpers for the line-oriented input format."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, TextIO, Union

from simelastic.config.defaults import COMMENT_CHAR
from simelastic.core.errors import InputError


class LineReader:
    """Reads significant lines from legacy input.

    Blank lines and lines starting with the comment character are skipped.
    Trailing comments are not stripped.

    Attributes:
        lineno: 1-based number of the last line returned

    """

    def __init__(self, source: Union[str, TextIO, Iterable[str]]):
        if isinstance(source, str):
            source = source.splitlines()
        self._lines = iter(source)
        self.lineno = 0

    def read_line(self) -> Optional[str]:
        """Next significant line, stripped, or None at end of input."""
        for raw in self._lines:
            self.lineno += 1
            line = raw.strip()
            if line and not line.startswith(COMMENT_CHAR):
                return line
        return None

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.read_line()
            if line is None:
                return
            yield line


def int_token(token: Optional[str], what: str) -> int:
    if token is None:
        raise InputError(f"Missing {what}")
    try:
        return int(token)
    except ValueError as e:
        raise InputError(f"Invalid {what}: '{token}'") from e


def float_token(token: Optional[str], what: str) -> float:
    if token is None:
        raise InputError(f"Missing {what}")
    try:
        return float(token)
    except ValueError as e:
        raise InputError(f"Invalid {what}: '{token}'") from e


def next_int(tokens: Iterator[str], what: str) -> int:
    return int_token(next(tokens, None), what)


def next_float(tokens: Iterator[str], what: str) -> float:
    return float_token(next(tokens, None), what)


def parse_count(args: str, keyword: str) -> int:
    """Entry count following a block keyword, e.g. the 2 in 'ISOTROPIC 2'."""
    count = next_int(iter(args.split()), f"entry count of {keyword}")
    if count < 0:
        raise InputError(f"Negative entry count of {keyword}: {count}")
    return count
