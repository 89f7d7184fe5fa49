"""Tests for reading, writing and rewriting INI files."""

from io import StringIO
from pathlib import Path

import pytest

from pyezini.ini import (
    IniEntry,
    IniEntryList,
    IniFileHandler,
    IniIOError,
    IniSyntaxError,
    delete_entry,
    merge_into_file,
    read_all,
    write_all,
)


def test_read_struct_file(struct_ini: Path) -> None:
    entries = read_all(struct_ini)
    assert list(entries) == [
        IniEntry("struct 1", "int field", "123"),
        IniEntry("struct 2", "str field", "string2"),
    ]


def test_write_format(tmp_path: Path) -> None:
    p = tmp_path / "out.ini"
    write_all(p, IniEntryList.from_entries([
        ("b", "z", ""),
        ("a", "y", "2"),
        ("a", "x", "1"),
    ]))
    assert p.read_text(encoding="utf-8") == (
        "[a]\nx = 1\ny = 2\n\n[b]\nz = \n")


def test_write_unsorted_iterable(tmp_path: Path) -> None:
    p = tmp_path / "out.ini"
    write_all(p, [IniEntry("b", "k", "1"), IniEntry("a", "k", "2"),
                  IniEntry("b", "k", "3")])
    assert p.read_text(encoding="utf-8") == "[a]\nk = 2\n\n[b]\nk = 3\n"


def test_write_empty_collection(tmp_path: Path) -> None:
    p = tmp_path / "out.ini"
    p.write_text("[old]\nk = v\n", encoding="utf-8")
    write_all(p, IniEntryList())
    assert p.read_text(encoding="utf-8") == ""


def test_write_options(tmp_path: Path) -> None:
    p = tmp_path / "out.ini"
    handler = IniFileHandler(p, delimiter="=", blank_lines=2,
                             comment="generated\nby tests")
    handler.write(IniEntryList.from_entries([("a", "x", "1"),
                                             ("b", "y", "2")]))
    assert p.read_text(encoding="utf-8") == (
        "# generated\n# by tests\n\n[a]\nx=1\n\n\n[b]\ny=2\n")
    assert read_all(p) == IniEntryList.from_entries(
        [("a", "x", "1"), ("b", "y", "2")])


def test_round_trip(tmp_path: Path) -> None:
    p = tmp_path / "rt.ini"
    original = IniEntryList.from_entries([
        ("server", "host", "example.org"),
        ("server", "port", "8080"),
        ("paths", "root", "/var/lib/some dir"),
        ("paths", "empty", ""),
        ("unicode", "名前", "値 with  spaces"),
    ])
    original.declare_section("no keys")
    write_all(p, original)
    assert read_all(p) == original


def test_rewrite_is_idempotent(tmp_path: Path) -> None:
    src = tmp_path / "messy.ini"
    src.write_text(
        "; header comment\n"
        "  [zeta]\n"
        "b=2\n"
        "\n"
        "[alpha]  ; trailing\n"
        "   k   =   v v   \n"
        "[zeta]\n"
        "a = 1\n",
        encoding="utf-8",
    )
    first = tmp_path / "first.ini"
    second = tmp_path / "second.ini"
    write_all(first, read_all(src))
    write_all(second, read_all(first))
    assert first.read_bytes() == second.read_bytes()
    assert first.read_text(encoding="utf-8") == (
        "[alpha]\nk = v v\n\n[zeta]\na = 1\nb = 2\n")

    write_all(first, read_all(first))
    assert first.read_bytes() == second.read_bytes()


def test_duplicate_in_file_warns(tmp_path: Path) -> None:
    p = tmp_path / "dup.ini"
    p.write_text("[a]\nx = 1\nx = 2\n", encoding="utf-8")
    with pytest.warns(UserWarning):
        entries = read_all(p)
    assert list(entries) == [IniEntry("a", "x", "2")]


def test_merge_overwrites(simple_ini: Path) -> None:
    merged = merge_into_file(simple_ini, [IniEntry("a", "x", "2")])
    assert merged.get("a", "x") == "2"
    text = simple_ini.read_text(encoding="utf-8")
    assert text == "[a]\nx = 2\n\n[b]\ny = 2\n"
    assert text.count("x = ") == 1


def test_merge_adds_new_sections_and_keys(simple_ini: Path) -> None:
    merge_into_file(simple_ini, [
        ("c", "w", "new"),
        ("a", "aa", "first"),
        ("c", "w", "newer"),
    ])
    assert simple_ini.read_text(encoding="utf-8") == (
        "[a]\naa = first\nx = 1\n\n[b]\ny = 2\n\n[c]\nw = newer\n")


def test_merge_missing_file(tmp_path: Path) -> None:
    p = tmp_path / "missing.ini"
    with pytest.raises(IniIOError) as exc:
        merge_into_file(p, [("a", "x", "1")])
    assert isinstance(exc.value.__cause__, FileNotFoundError)
    assert not p.exists()

    merge_into_file(p, [("a", "x", "1")], missing_ok=True)
    assert p.read_text(encoding="utf-8") == "[a]\nx = 1\n"


def test_merge_leaves_malformed_file_alone(tmp_path: Path) -> None:
    p = tmp_path / "bad.ini"
    raw = b"[a]\nx = 1\n[broken\ny = 2\n"
    p.write_bytes(raw)
    with pytest.raises(IniSyntaxError):
        merge_into_file(p, [("a", "x", "2")])
    assert p.read_bytes() == raw


def test_delete_entry(simple_ini: Path) -> None:
    assert delete_entry(simple_ini, "b", "y") is True
    # the section header survives its last key.
    assert simple_ini.read_text(encoding="utf-8") == "[a]\nx = 1\n\n[b]\n"
    entries = read_all(simple_ini)
    assert entries.sections() == ["a", "b"]
    assert list(entries) == [IniEntry("a", "x", "1")]


def test_delete_missing_is_noop(simple_ini: Path) -> None:
    before = simple_ini.read_bytes()
    assert delete_entry(simple_ini, "a", "nope") is False
    assert delete_entry(simple_ini, "nope", "x") is False
    assert simple_ini.read_bytes() == before


def test_delete_leaves_malformed_file_alone(tmp_path: Path) -> None:
    p = tmp_path / "bad.ini"
    raw = b"[a]\nx = 1\nno assignment here\n"
    p.write_bytes(raw)
    with pytest.raises(IniSyntaxError):
        delete_entry(p, "a", "x")
    assert p.read_bytes() == raw


def test_io_errors(tmp_path: Path) -> None:
    with pytest.raises(IniIOError):
        read_all(tmp_path / "nope.ini")
    with pytest.raises(IniIOError):
        delete_entry(tmp_path / "nope.ini", "a", "x")
    with pytest.raises(IniIOError):
        write_all(tmp_path / "no" / "such" / "dir.ini", IniEntryList())
    with pytest.raises(IniIOError):
        read_all(tmp_path)


def test_encoding_fallback(tmp_path: Path) -> None:
    p = tmp_path / "gbk.ini"
    p.write_bytes("[s]\nk = 中文配置文件测试数据，编码不是 UTF-8\n".encode("gbk"))
    handler = IniFileHandler(p)
    entries = handler.read()
    assert [(e.section, e.key) for e in entries] == [("s", "k")]
    assert handler.encoding.lower().replace("_", "-") != "utf-8"

    # a rewrite keeps the detected codec.
    handler.write(entries)
    assert read_all(p, handler.encoding) == entries


def test_handler_str(tmp_path: Path) -> None:
    handler = IniFileHandler(tmp_path / "x.ini")
    assert str(handler).startswith("INI file: ")
    assert str(handler).endswith("x.ini(utf-8)")


def test_failed_encode_keeps_file(tmp_path: Path) -> None:
    p = tmp_path / "gbk.ini"
    text = "".join(f"[s{i:02d}]\nk = 值{i}\n\n" for i in range(20))
    raw = text.encode("gbk")
    p.write_bytes(raw)
    handler = IniFileHandler(p, "gbk")
    with pytest.raises(IniIOError) as exc:
        handler.merge([IniEntry("s00", "emoji", "\U0001F600")])
    assert isinstance(exc.value.__cause__, UnicodeEncodeError)
    assert p.read_bytes() == raw
    assert len(read_all(p, "gbk")) == 20


def test_merge_rejects_carriage_return(simple_ini: Path) -> None:
    before = simple_ini.read_bytes()
    with pytest.raises(ValueError):
        merge_into_file(simple_ini, [IniEntry("a", "y", "foo\rbar")])
    assert simple_ini.read_bytes() == before
    assert len(read_all(simple_ini)) == 2


def test_readstream_carriage_return_inside_line() -> None:
    # StringIO without newline translation keeps a lone `\r` in the line.
    with pytest.raises(IniSyntaxError) as exc:
        IniFileHandler.readstream(StringIO("[a]\nk = foo\rbar\n"))
    assert exc.value.lineno == 2


def test_utf8_bom(tmp_path: Path) -> None:
    p = tmp_path / "bom.ini"
    p.write_bytes(b"\xef\xbb\xbf[a]\nx = 1\n")
    assert list(read_all(p)) == [IniEntry("a", "x", "1")]


def test_duplicate_warning_points_at_caller(tmp_path: Path) -> None:
    p = tmp_path / "dup.ini"
    p.write_text("[a]\nx = 1\nx = 2\n", encoding="utf-8")
    with pytest.warns(UserWarning) as record:
        IniFileHandler(p).read()
    assert record[0].filename == __file__
