# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 21:01:26
# @Author : Kariko Lin

from .errors import IniError, IniIOError, IniSyntaxError
from .model import IniEntry, IniEntryList
from .lexer import ParseCursor, iter_entries, next_entry, read_line
from .parser import (
    IniFileHandler,
    delete_entry,
    merge_into_file,
    read_all,
    write_all
)
from .export import IniJsonHandler, IniYamlHandler
