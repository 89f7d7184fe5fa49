# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2026/10/14 19:46:30
# @Author : Kariko Lin

"""JSON / YAML mirrors of an `IniEntryList`.

Both use the same nested layout:

    ```yaml
    section:
      key: value
    empty section: {}
    ```
"""

import json
from collections.abc import Mapping
from os import PathLike
from typing import Any

import yaml

from ..abstract import FileHandler
from .consts import DEFAULT_ENCODING
from .errors import IniIOError, IniSyntaxError
from .model import IniEntryList


def to_mapping(instance: IniEntryList) -> dict[str, dict[str, str]]:
    return {
        section: {key: value for _, key, value in entries}
        for section, entries in instance.groups()
    }


def from_mapping(data: Mapping[str, Any] | None) -> IniEntryList:
    ret = IniEntryList()
    if data is None:  # empty yaml document
        return ret
    if not isinstance(data, Mapping):
        raise ValueError('top level should be a mapping of sections.')
    for section, pairs in data.items():
        section = str(section)
        ret.declare_section(section)
        if pairs is None:
            continue
        if not isinstance(pairs, Mapping):
            raise ValueError(f'[{section}] should be a mapping of keys.')
        for key, value in pairs.items():
            if isinstance(value, (Mapping, list)):
                raise ValueError(
                    f'[{section}] {key}: nested values are not supported.')
            # yaml may give us int / bool / None.
            ret.insert_or_update(
                section, str(key), '' if value is None else str(value))
    return ret


class IniJsonHandler(FileHandler[IniEntryList]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str = DEFAULT_ENCODING
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> IniEntryList:
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                src = json.load(fp)
        except (OSError, UnicodeDecodeError) as e:
            raise IniIOError(f'cannot read "{self._fn}": {e}') from e
        except json.JSONDecodeError as e:
            lines = e.doc.splitlines() or ['']
            raise IniSyntaxError(
                f'broken JSON in "{self._fn}": {e.msg}', e.lineno,
                lines[min(e.lineno, len(lines)) - 1]) from e
        return from_mapping(src)

    def write(self, instance: IniEntryList, indent: int = 2) -> None:
        try:
            with open(self._fn, 'w', encoding=self._codec) as fp:
                json.dump(to_mapping(instance), fp,
                          ensure_ascii=False, indent=indent)
        except OSError as e:
            raise IniIOError(f'cannot write "{self._fn}": {e}') from e


class IniYamlHandler(FileHandler[IniEntryList]):
    """Values are always dumped as strings, so `1` comes back as `'1'`."""

    def __init__(
        self, filename: str | PathLike[str],
        encoding: str = DEFAULT_ENCODING
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> IniEntryList:
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                src = yaml.safe_load(fp)
        except (OSError, UnicodeDecodeError) as e:
            raise IniIOError(f'cannot read "{self._fn}": {e}') from e
        except yaml.YAMLError as e:
            raise IniSyntaxError(f"broken YAML: {e}") from e
        return from_mapping(src)

    def write(self, instance: IniEntryList, indent: int = 2) -> None:
        try:
            with open(self._fn, 'w', encoding=self._codec) as fp:
                yaml.safe_dump(to_mapping(instance), fp,
                               allow_unicode=True,
                               sort_keys=False,
                               indent=indent)
        except OSError as e:
            raise IniIOError(f'cannot write "{self._fn}": {e}') from e
