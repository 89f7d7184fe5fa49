from __future__ import annotations

from pathlib import Path

import pytest

STRUCT_INI = """\
[struct 1]
int field = 123
[struct 2]
str field = string2
"""


@pytest.fixture()
def struct_ini(tmp_path: Path) -> Path:
    """Two sections, one key each."""
    p = tmp_path / "test_struct.ini"
    p.write_text(STRUCT_INI, encoding="utf-8")
    return p


@pytest.fixture()
def simple_ini(tmp_path: Path) -> Path:
    p = tmp_path / "simple.ini"
    p.write_text("[a]\nx = 1\n\n[b]\ny = 2\n", encoding="utf-8")
    return p
