# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/12 21:10:05
# @Author : Kariko Lin

"""Exceptions raised while reading or rewriting INI files.

A lookup or delete miss is *not* an error here, those calls
just return `False`.
"""


class IniError(Exception):
    """Base class of everything this package raises on purpose."""
    pass


class IniSyntaxError(IniError):
    """A malformed section header or an assignment without `=`."""

    def __init__(self, message: str, lineno: int = 0, line: str = '') -> None:
        self.lineno = lineno
        self.line = line
        if lineno:
            message = f'line {lineno}: {message}: {line!r}'
        super().__init__(message)


class IniIOError(IniError):
    """Opening, reading, decoding or writing the file failed.

    The original exception is kept as `__cause__`.
    """
    pass
