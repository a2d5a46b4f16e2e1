import asyncio
import sys

import pytest

from forknet.command import STREAM_LINE_LIMIT, format_command, run_command, stream_command
from forknet.errors import CommandError


def py(code):
    return [sys.executable, "-c", code]


@pytest.mark.asyncio
async def test_returns_stdout_on_clean_exit():
    out = await run_command(py("print('hello')"))
    assert out.strip() == "hello"


@pytest.mark.asyncio
async def test_non_zero_exit_raises():
    with pytest.raises(CommandError) as exc_info:
        await run_command(py("import sys; sys.stderr.write('boom'); sys.exit(3)"))
    assert exc_info.value.returncode == 3
    assert "boom" in str(exc_info.value)


@pytest.mark.asyncio
async def test_stderr_on_zero_exit_raises_by_default():
    with pytest.raises(CommandError) as exc_info:
        await run_command(py("import sys; print('ok'); sys.stderr.write('warning')"))
    assert exc_info.value.returncode == 0
    assert str(exc_info.value) == "stderr: warning"


@pytest.mark.asyncio
async def test_stderr_tolerated_when_disabled():
    out = await run_command(
        py("import sys; print('ok'); sys.stderr.write('warning')"), fail_on_stderr=False)
    assert out.strip() == "ok"


@pytest.mark.asyncio
async def test_missing_executable_raises_command_error():
    with pytest.raises(CommandError):
        await run_command(["forknet-no-such-binary-xyz", "--help"])


@pytest.mark.asyncio
async def test_arguments_are_not_shell_interpreted():
    out = await run_command(py("import sys; print(sys.argv[1])") + ["$HOME; echo injected"])
    assert out.strip() == "$HOME; echo injected"


@pytest.mark.asyncio
async def test_stream_command_logs_lines(caplog):
    caplog.set_level("INFO", logger="forknet.command")
    await stream_command(py("import sys; print('one'); sys.stderr.write('two\\n')"))
    messages = [r.getMessage() for r in caplog.records]
    assert "one" in messages
    assert "two" in messages


@pytest.mark.asyncio
async def test_stream_command_handles_lines_past_reader_limit(caplog):
    caplog.set_level("INFO", logger="forknet.command")
    code = "print('x' * 200000); print('y' * (STREAM_LINE_LIMIT + 10)); print('done')"
    await stream_command(py(code.replace("STREAM_LINE_LIMIT", str(STREAM_LINE_LIMIT))))
    messages = [r.getMessage() for r in caplog.records]
    assert "x" * 200000 in messages
    assert "done" in messages
    assert any("longer than" in m for m in messages)


@pytest.mark.asyncio
async def test_stream_command_raises_on_failure():
    with pytest.raises(CommandError) as exc_info:
        await stream_command(py("import sys; sys.exit(2)"))
    assert exc_info.value.returncode == 2


@pytest.mark.asyncio
async def test_stream_command_does_not_return_while_child_runs():
    task = asyncio.ensure_future(stream_command(py("import time; print('up', flush=True); time.sleep(60)")))
    done, _ = await asyncio.wait([task], timeout=1.0)
    assert not done
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


def test_format_command_quotes_arguments():
    assert format_command(["cast", "send", "transfer(address,uint256)"]) == \
        "cast send 'transfer(address,uint256)'"
