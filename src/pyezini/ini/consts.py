# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/12 21:03:41
# @Author : Kariko Lin

from enum import Enum


class IniMark(str, Enum):
    COMMENT = ';'
    COMMENT_ALT = '#'
    SECTION_BEGIN = '['
    SECTION_END = ']'
    ASSIGN = '='


COMMENT_MARKS = (IniMark.COMMENT.value, IniMark.COMMENT_ALT.value)

DEFAULT_ENCODING = 'utf-8'
DEFAULT_DELIMITER = ' = '

# chardet results below this are not trusted.
CODEC_CONFIDENCE = 0.8
FALLBACK_CODEC = 'gbk'

# utf-8 files saved by some editors start with this.
BOM = '\ufeff'
