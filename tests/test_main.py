import io

import pytest

from pyht.debug import dump_table
from pyht.main import (
    RunOk,
    ScriptAssertionError,
    ScriptError,
    demo,
    main,
    run_line,
    run_source,
)
from pyht.table import Table, set_debug_trace_resize


def test_demo(capsys):
    assert demo() == RunOk()

    out = capsys.readouterr().out
    assert "name: mei mei\n" in out
    assert "name: tole tole\n" in out
    assert "email: vro@github.com\n" in out
    assert out.endswith("All tests passed!\n")


def test_run_line():
    t = Table()
    assert run_line(t, "") == RunOk()
    assert run_line(t, "   # comment") == RunOk()

    assert run_line(t, "set greeting hello   there") == RunOk()
    assert t.search("greeting") == "hello there"
    assert run_line(t, "expect greeting hello there") == RunOk()
    assert run_line(t, "expect greeting bye") == ScriptAssertionError()

    assert run_line(t, "missing greeting") == ScriptAssertionError()
    assert run_line(t, "del greeting") == RunOk()
    assert run_line(t, "missing greeting") == RunOk()

    # should reject unknown or incomplete commands
    assert run_line(t, "frobnicate x") == ScriptError()
    assert run_line(t, "set onlykey") == ScriptError()
    assert run_line(t, "get") == ScriptError()


def test_run_source_stops_on_failure(capfd):
    t = Table()
    source = "set a 1\nexpect a 2\nset b 2\n"
    assert run_source(t, source) == ScriptAssertionError()
    assert t.search("a") == "1"
    assert not t.contains("b")
    assert "expect a" in capfd.readouterr().err


def test_run_file(tmp_path):
    ok = tmp_path / "ok.ht"
    ok.write_text("set a 1\nexpect a 1\n")
    with pytest.raises(SystemExit) as e:
        main([str(ok)])
    assert e.value.code == 0

    failing = tmp_path / "failing.ht"
    failing.write_text("set a 1\nexpect a 2\n")
    with pytest.raises(SystemExit) as e:
        main([str(failing)])
    assert e.value.code == 70

    broken = tmp_path / "broken.ht"
    broken.write_text("put a 1\n")
    with pytest.raises(SystemExit) as e:
        main([str(broken)])
    assert e.value.code == 65


def test_main_usage(capsys):
    with pytest.raises(SystemExit) as e:
        main(["a", "b"])
    assert e.value.code == 64
    assert "Usage" in capsys.readouterr().out


def test_main_demo(capsys):
    with pytest.raises(SystemExit) as e:
        main(["--demo"])
    assert e.value.code == 0
    assert "All tests passed!" in capsys.readouterr().out


def test_repl(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("set a 1\nget a\nget b\n"))
    main([])
    assert capsys.readouterr().out == "a: 1\nb: (not found)\n"


def test_dump_table(capsys):
    t = Table()
    t.insert("k", "v")
    t.insert("gone", "x")
    t.delete("gone")

    dump_table(t, "t")
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "== t == count 1 capacity 53 base 53"
    assert len(lines) == 1 + 53
    assert sum(line.endswith(" empty") for line in lines) == 51
    assert sum(line.endswith(" deleted") for line in lines) == 1
    assert any(line.endswith(" occupied 'k' -> 'v'") for line in lines)
    assert lines[1].startswith("0000 ")


def test_trace_resize(capsys):
    set_debug_trace_resize(True)
    try:
        t = Table()
        for i in range(39):
            t.insert(f"k{i}", str(i))
    finally:
        set_debug_trace_resize(False)

    assert capsys.readouterr().out == "resize 53 -> 107 (count 38)\n"
