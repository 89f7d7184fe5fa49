# -*- encoding: utf-8 -*-
# @File   : lexer.py
# @Time   : 2026/10/12 22:41:17
# @Author : Kariko Lin

"""Line oriented INI tokenizer.

Supported lines (leading whitespace ignored):

    ```ini
    ; comment, also `# comment`
    [section]   ; anything after `]` is dropped
    key = value with  inner spaces
    empty =
    ```

Each call of `next_entry()` consumes lines until it finds one
`key = value` line, so section headers, comments and blank lines
never come out on their own.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, TextIO

from .consts import BOM, COMMENT_MARKS, IniMark
from .errors import IniIOError, IniSyntaxError
from .model import IniEntry

_log = logging.getLogger(__name__)


@dataclass
class ParseCursor:
    """State kept between two `next_entry()` calls on the same stream."""
    section: str | None = None
    lineno: int = 0
    # every header met so far, in file order. lets readers keep
    # sections which have no keys at all.
    headers: list[str] = field(default_factory=list)


def read_line(stream: TextIO) -> str | None:
    """读取一行并去掉行尾换行符。流已读完时返回`None`（而不是空串）。"""
    try:
        line = stream.readline()
    except OSError as e:
        raise IniIOError(f'failed to read INI stream: {e}') from e
    if not line:
        return None
    if line.endswith('\n'):
        line = line[:-1]
        if line.endswith('\r'):
            line = line[:-1]
    return line


def _parse_section(text: str, cursor: ParseCursor, raw: str) -> str:
    end = text.find(IniMark.SECTION_END)
    if end < 0:
        raise IniSyntaxError(
            'section header without closing bracket', cursor.lineno, raw)
    name = text[1:end].strip()
    if not name:
        raise IniSyntaxError('empty section name', cursor.lineno, raw)
    return name


def next_entry(stream: TextIO, cursor: ParseCursor) -> IniEntry | None:
    """Read the stream up to the next `key = value` line.

    Returns the entry found, or `None` once the stream is exhausted.
    Raises `IniSyntaxError` on a broken header or assignment, and
    `IniIOError` when the stream itself fails. `cursor` is updated
    in place.
    """
    while (raw := read_line(stream)) is not None:
        cursor.lineno += 1
        if cursor.lineno == 1:
            raw = raw.removeprefix(BOM)
        text = raw.lstrip()
        if not text or text[0] in COMMENT_MARKS:
            continue
        if text[0] == IniMark.SECTION_BEGIN:
            cursor.section = _parse_section(text, cursor, raw)
            cursor.headers.append(cursor.section)
            continue

        key, sep, value = text.partition(IniMark.ASSIGN)
        if not sep:
            raise IniSyntaxError(
                'expected "key = value"', cursor.lineno, raw)
        key = key.strip()
        if not key:
            raise IniSyntaxError('empty key', cursor.lineno, raw)
        if cursor.section is None:
            raise IniSyntaxError(
                'entry outside of any section', cursor.lineno, raw)
        return IniEntry(cursor.section, key, value.strip())

    _log.debug('end of INI stream after %d lines', cursor.lineno)
    return None


def iter_entries(
    stream: TextIO, cursor: ParseCursor | None = None
) -> Iterator[IniEntry]:
    """Lazily yield every entry of `stream` in file order.

    Pass your own `cursor` to look at the headers afterwards.
    """
    if cursor is None:
        cursor = ParseCursor()
    while (entry := next_entry(stream, cursor)) is not None:
        yield entry
