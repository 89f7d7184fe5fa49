# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 20:01:52
# @Author : Kariko Lin

import logging

from .ini import (
    IniEntry, IniEntryList, IniFileHandler,
    IniJsonHandler, IniYamlHandler,
    IniError, IniIOError, IniSyntaxError,
    ParseCursor, iter_entries, next_entry, read_line,
    read_all, write_all, merge_into_file, delete_entry
)

__all__ = [
    'IniEntry', 'IniEntryList', 'IniFileHandler',
    'IniJsonHandler', 'IniYamlHandler',
    'IniError', 'IniIOError', 'IniSyntaxError',
    'ParseCursor', 'iter_entries', 'next_entry', 'read_line',
    'read_all', 'write_all', 'merge_into_file', 'delete_entry'
]

__version__ = '0.1.0'

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
