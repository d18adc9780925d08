import asyncio
from typing import cast

from hermes_cli.shell import HermesCLI, ShellProcess, strip_ansi


class _Proc:
    pid = 7


def _shell() -> ShellProcess:
    return ShellProcess(process=cast(asyncio.subprocess.Process, _Proc()), command="tool")


def test_strip_ansi_removes_color_codes() -> None:
    assert strip_ansi("\u001b[31mred\u001b[0m") == "red"
    assert strip_ansi("\u001b[1;32mok\u001b[39;49m done") == "ok done"


def test_strip_ansi_removes_cursor_and_eight_bit_sequences() -> None:
    assert strip_ansi("\u001b[2K\u001b[1Gprogress") == "progress"
    assert strip_ansi("\u009b33mwarn\u009b0m") == "warn"
    assert strip_ansi("\u001b[?25lhidden\u001b[?25h") == "hidden"


def test_strip_ansi_keeps_plain_text() -> None:
    text = "plain [brackets] and 100% text\n"
    assert strip_ansi(text) == text


def test_strip_ansi_is_idempotent() -> None:
    raw = "\u001b[1m\u001b[34mDeploy\u001b[0m: \u001b[32msuccess\u001b[0m\n"
    once = strip_ansi(raw)
    assert once == "Deploy: success\n"
    assert strip_ansi(once) == once


def test_remove_ansi_colors_matches_strip_ansi() -> None:
    raw = "\u001b[31merror\u001b[0m"
    assert HermesCLI.remove_ansi_colors(raw) == strip_ansi(raw) == "error"


def test_append_strips_each_chunk() -> None:
    shell = _shell()
    shell.append("\u001b[31mred\u001b[0m ")
    shell.append("\u001b[32mgreen\u001b[0m")
    assert shell.output == "red green"


def test_sequence_split_across_chunks_is_not_fully_stripped() -> None:
    shell = _shell()
    shell.append("\u001b[3")
    shell.append("1mred")
    assert shell.output == "1mred"


def test_mark_finished_only_applies_once() -> None:
    shell = _shell()
    assert shell.finished is False

    shell.mark_finished(0)
    shell.mark_finished(5)

    assert shell.finished is True
    assert shell.exit_code == 0
