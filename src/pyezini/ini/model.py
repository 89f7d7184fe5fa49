# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/12 21:27:52
# @Author : Kariko Lin

"""
Flat INI structure: a sorted list of `(section, key, value)` entries.

No inheritance, no `+=`, no multi-line values.
All values are plain strings, callers convert them themselves.
"""

from bisect import bisect_left
from collections.abc import Iterable, Sequence
from typing import Iterator, NamedTuple, overload

from .consts import COMMENT_MARKS, IniMark


class IniEntry(NamedTuple):
    section: str
    key: str
    value: str


# text mode reads split lines on either of these.
LINE_BREAKS = ('\r', '\n')


def _has_line_break(text: str) -> bool:
    return any(i in text for i in LINE_BREAKS)


def _sort_key(entry: IniEntry) -> tuple[str, str]:
    # values never take part in ordering.
    return entry.section, entry.key


def _check_section(section: str) -> None:
    if not section or section != section.strip():
        raise ValueError(f'invalid section name: {section!r}')
    if IniMark.SECTION_END in section or _has_line_break(section):
        raise ValueError(f'section name not writable: {section!r}')


def _check_key(key: str) -> None:
    if not key or key != key.strip():
        raise ValueError(f'invalid key: {key!r}')
    if (IniMark.ASSIGN in key or _has_line_break(key)
            or key[0] in COMMENT_MARKS or key[0] == IniMark.SECTION_BEGIN):
        raise ValueError(f'key not writable: {key!r}')


def _check_value(value: str) -> None:
    if _has_line_break(value):
        raise ValueError(f'multi-line values are not supported: {value!r}')


class IniEntryList(Sequence[IniEntry]):
    """按 (小节, 键) 排序、且 (小节, 键) 不重复的 INI 词条表。

    排序按码位逐字比较（即`str`自身的比较），值不参与排序，也不参与去重。
    同一 (小节, 键) 再次插入时只覆盖值。

    删除某小节的最后一个键后，该小节仍然保留（写文件时只剩小节头）。
    """

    @overload
    def __init__(self) -> None: ...
    @overload
    def __init__(self, section: str, key: str, value: str) -> None: ...

    def __init__(
        self,
        section: str | None = None,
        key: str | None = None,
        value: str | None = None
    ) -> None:
        self.__entries: list[IniEntry] = []
        self.__sections: set[str] = set()
        if section is not None:
            if key is None or value is None:
                raise TypeError('a seed entry needs section, key and value')
            self.insert_or_update(section, key, value)

    @classmethod
    def from_entries(
        cls, entries: Iterable[IniEntry | tuple[str, str, str]]
    ) -> 'IniEntryList':
        ret = cls()
        for section, key, value in entries:
            ret.insert_or_update(section, key, value)
        return ret

    def __locate(self, section: str, key: str) -> tuple[int, bool]:
        idx = bisect_left(self.__entries, (section, key), key=_sort_key)
        found = (
            idx < len(self.__entries)
            and _sort_key(self.__entries[idx]) == (section, key))
        return idx, found

    def insert_or_update(self, section: str, key: str, value: str) -> bool:
        """插入词条；若 (小节, 键) 已存在则覆盖其值。

        Returns:
            `True` if a new entry got inserted,
            `False` if an existing value was replaced.
        """
        _check_section(section)
        _check_key(key)
        _check_value(value)
        # str is immutable, so each entry owns its strings already.
        entry = IniEntry(section, key, value)
        idx, found = self.__locate(section, key)
        self.__sections.add(section)
        if found:
            self.__entries[idx] = entry
            return False
        self.__entries.insert(idx, entry)
        return True

    def remove_matching(self, section: str, key: str) -> bool:
        """Drop the entry with exactly this section and key.

        A miss is a no-op and returns `False`.
        """
        idx, found = self.__locate(section, key)
        if not found:
            return False
        del self.__entries[idx]
        return True

    def declare_section(self, section: str) -> None:
        """Keep `section` even if it never gets any key."""
        _check_section(section)
        self.__sections.add(section)

    def get(self, section: str, key: str,
            default: str | None = None) -> str | None:
        idx, found = self.__locate(section, key)
        return self.__entries[idx].value if found else default

    def sections(self) -> list[str]:
        return sorted(self.__sections)

    def groups(self) -> Iterator[tuple[str, list[IniEntry]]]:
        """Yield `(section, entries)` in sorted order, empty sections too."""
        grouped: dict[str, list[IniEntry]] = {
            i: [] for i in self.sections()}
        for entry in self.__entries:
            grouped[entry.section].append(entry)
        yield from grouped.items()

    @overload
    def __getitem__(self, index: int) -> IniEntry: ...
    @overload
    def __getitem__(self, index: slice) -> list[IniEntry]: ...

    def __getitem__(self, index: int | slice) -> IniEntry | list[IniEntry]:
        return self.__entries[index]

    def __iter__(self) -> Iterator[IniEntry]:
        # a copy, so callers may mutate while walking.
        return iter(list(self.__entries))

    def __len__(self) -> int:
        return len(self.__entries)

    def __contains__(self, item: object) -> bool:
        if (isinstance(item, tuple) and len(item) in (2, 3)
                and all(isinstance(i, str) for i in item)):
            idx, found = self.__locate(item[0], item[1])
            return found and (
                len(item) == 2 or self.__entries[idx].value == item[2])
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniEntryList):
            return NotImplemented
        return (self.__entries == list(other)
                and self.sections() == other.sections())

    def __repr__(self) -> str:
        return 'IniEntryList { .sections = %d, .entries = %d }' % (
            len(self.__sections), len(self.__entries))
