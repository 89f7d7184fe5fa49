# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/13 00:12:09
# @Author : Kariko Lin

"""INI 文件的读、写与“原地”修改。

所谓原地修改（合并、删除）其实都是：整份读入 `IniEntryList`，
改完后再*整份重写*。读取（含语法检查）全部成功之后才会动目标文件，
因此格式错误的文件不会被写坏。

注意：没有任何文件锁。两个调用方同时改同一个文件时，
后写入的一方会覆盖前者的修改。
"""

import logging
from collections.abc import Iterable
from io import StringIO
from os import PathLike
from typing import Iterator, TextIO
from warnings import warn

import chardet

from ..abstract import FileHandler
from .consts import (
    CODEC_CONFIDENCE,
    DEFAULT_DELIMITER,
    DEFAULT_ENCODING,
    FALLBACK_CODEC,
    IniMark
)
from .errors import IniIOError, IniSyntaxError
from .lexer import ParseCursor, iter_entries
from .model import IniEntry, IniEntryList

_log = logging.getLogger(__name__)


class IniFileHandler(FileHandler[IniEntryList]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str = DEFAULT_ENCODING, *,
        delimiter: str = DEFAULT_DELIMITER,
        blank_lines: int = 1,
        comment: str = ''
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._delimiter = delimiter
        self._blank_lines = blank_lines
        self._comment = comment

    @property
    def encoding(self) -> str:
        """当前读写所用的编码。读取时若发生回退，这里会变成探测到的编码。"""
        return self._codec

    @staticmethod
    def readstream(
        buf: TextIO, ins: IniEntryList | None = None
    ) -> IniEntryList:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`便是。
        同一个流里重复出现的 (小节, 键) 以后者为准，并予以告警。
        """
        if ins is None:
            ins = IniEntryList()
        cursor = ParseCursor()
        seen: set[tuple[str, str]] = set()
        for section, key, value in iter_entries(buf, cursor):
            if (section, key) in seen:
                warn(f'[{section}] 中的 "{key}" 重复出现'
                     f'（第 {cursor.lineno} 行），旧值将被覆盖。',
                     stacklevel=3)
            seen.add((section, key))
            try:
                ins.insert_or_update(section, key, value)
            except ValueError as e:
                raise IniSyntaxError(str(e), cursor.lineno) from e
        for i in cursor.headers:
            ins.declare_section(i)
        _log.debug('parsed %d entries in %d sections',
                   len(seen), len(cursor.headers))
        return ins

    @staticmethod
    def _decode_file(filename: str) -> tuple[StringIO, str]:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        encoding = codec.get('encoding') if codec else None
        if encoding is None or codec['confidence'] < CODEC_CONFIDENCE:
            encoding = DEFAULT_ENCODING

        # fallbacks
        try:
            buf = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            encoding = FALLBACK_CODEC
            buf = raw.decode(encoding)
        # newline=None: translate `\r\n` like open() does.
        return StringIO(buf, newline=None), encoding

    def read(self) -> IniEntryList:
        """读取`IniFileHandler`实例指定的文件。

        Raises:
            IniIOError: 文件打不开、读不了，或者怎么都解不了码。
            IniSyntaxError: 小节头缺少`]`，或者键值对缺少`=`。
        """
        try:
            try:
                with open(self._fn, 'r', encoding=self._codec) as fp:
                    return self.readstream(fp)
            except UnicodeDecodeError:
                # wrong codec given, guess it via chardet.
                buf, codec = self._decode_file(self._fn)
        except (OSError, UnicodeDecodeError) as e:
            raise IniIOError(f'cannot read "{self._fn}": {e}') from e

        _log.warning('"%s" is not %s encoded, read as %s instead.',
                     self._fn, self._codec, codec)
        self._codec = codec
        return self.readstream(buf)

    def lines(self, instance: IniEntryList) -> Iterator[str]:
        """Render `instance` line by line, without line breaks."""
        if self._comment:
            for i in self._comment.split('\n'):
                yield f'{IniMark.COMMENT_ALT.value} {i}'.rstrip()
            yield ''
        for idx, (section, entries) in enumerate(instance.groups()):
            if idx > 0:
                yield from [''] * self._blank_lines
            yield (f'{IniMark.SECTION_BEGIN.value}{section}'
                   f'{IniMark.SECTION_END.value}')
            for _, key, value in entries:
                yield f'{key}{self._delimiter}{value}'

    def write(
        self, instance: IniEntryList | Iterable[IniEntry]
    ) -> None:
        """保存（覆盖）到 INI 文件。

        每个小节只写一次、按名称排序，小节之间空`blank_lines`行。
        换行符固定为 LF。
        传入的若不是`IniEntryList`，会先排序去重。
        """
        if not isinstance(instance, IniEntryList):
            instance = IniEntryList.from_entries(instance)
        # nothing is truncated until `raw` is fully encoded.
        try:
            data = ''.join(f'{i}\n' for i in self.lines(instance))
            raw = data.encode(self._codec)
        except (UnicodeEncodeError, LookupError) as e:
            raise IniIOError(
                f'cannot encode "{self._fn}" as {self._codec}: {e}') from e
        try:
            with open(self._fn, 'wb') as fp:
                fp.write(raw)
        except OSError as e:
            raise IniIOError(f'cannot write "{self._fn}": {e}') from e
        _log.debug('wrote %d entries to "%s"', len(instance), self._fn)

    def merge(
        self, entries: Iterable[IniEntry | tuple[str, str, str]], *,
        missing_ok: bool = False
    ) -> IniEntryList:
        """把`entries`合并进文件：读入、覆盖同名键、整份重写。

        `missing_ok=True`时，文件不存在视同空文件（即新建）。
        返回合并后的词条表。
        """
        try:
            merged = self.read()
        except IniIOError as e:
            if not (missing_ok and isinstance(e.__cause__, FileNotFoundError)):
                raise
            merged = IniEntryList()
        count = 0
        for section, key, value in entries:
            merged.insert_or_update(section, key, value)
            count += 1
        self.write(merged)
        _log.info('merged %d entries into "%s"', count, self._fn)
        return merged

    def delete(self, section: str, key: str) -> bool:
        """删除文件中的 (小节, 键)，然后整份重写。

        找不到时什么也不删（但仍会重写一遍），返回`False`。
        小节被删空后小节头仍会保留。
        """
        entries = self.read()
        removed = entries.remove_matching(section, key)
        self.write(entries)
        if removed:
            _log.info('deleted [%s] %s from "%s"', section, key, self._fn)
        else:
            _log.info('[%s] %s not found in "%s"', section, key, self._fn)
        return removed

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def read_all(
    path: str | PathLike[str], encoding: str = DEFAULT_ENCODING
) -> IniEntryList:
    return IniFileHandler(path, encoding).read()


def write_all(
    path: str | PathLike[str],
    entries: IniEntryList | Iterable[IniEntry],
    encoding: str = DEFAULT_ENCODING,
    **options
) -> None:
    IniFileHandler(path, encoding, **options).write(entries)


def merge_into_file(
    path: str | PathLike[str],
    entries: Iterable[IniEntry | tuple[str, str, str]],
    encoding: str = DEFAULT_ENCODING, *,
    missing_ok: bool = False,
    **options
) -> IniEntryList:
    return IniFileHandler(path, encoding, **options).merge(
        entries, missing_ok=missing_ok)


def delete_entry(
    path: str | PathLike[str], section: str, key: str,
    encoding: str = DEFAULT_ENCODING,
    **options
) -> bool:
    return IniFileHandler(path, encoding, **options).delete(section, key)
