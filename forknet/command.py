import asyncio
import logging
import shlex

from forknet.errors import CommandError

logger = logging.getLogger(__name__)

# anvil traces can print very long single lines
STREAM_LINE_LIMIT = 1024 * 1024


def format_command(args):
    return shlex.join(str(a) for a in args)


async def _spawn(args, stdout, stderr, **kwargs):
    try:
        return await asyncio.create_subprocess_exec(*args, stdout=stdout, stderr=stderr, **kwargs)
    except OSError as ex:
        raise CommandError(args, f"Error: cannot start {args[0]}: {ex}") from ex


async def run_command(args, *, fail_on_stderr=True):
    """
    Run a command to completion and return its standard output.

    Raises CommandError when the command exits non-zero, or when it writes
    anything to standard error and fail_on_stderr is set.
    """
    args = [str(a) for a in args]
    process = await _spawn(args, asyncio.subprocess.PIPE, asyncio.subprocess.PIPE)
    stdout, stderr = await process.communicate()
    out = stdout.decode(errors="replace")
    err = stderr.decode(errors="replace")

    if process.returncode != 0:
        raise CommandError(
            args,
            f"Error: command failed with exit code {process.returncode}: {err.strip()}",
            returncode=process.returncode,
            stderr=err,
        )
    if err:
        if fail_on_stderr:
            raise CommandError(args, f"stderr: {err.strip()}", returncode=0, stderr=err)
        logger.warning(f"{args[0]} wrote to stderr: {err.strip()}")
    return out


async def stream_command(args):
    """Run a long-lived command, logging each line of its output until it exits."""
    args = [str(a) for a in args]
    process = await _spawn(args, asyncio.subprocess.PIPE, asyncio.subprocess.STDOUT, limit=STREAM_LINE_LIMIT)
    try:
        while True:
            try:
                line = await process.stdout.readline()
            except ValueError:
                # the reader drops the oversized line and keeps going
                logger.warning(f"Skipped a {args[0]} output line longer than {STREAM_LINE_LIMIT} bytes")
                continue
            if not line:
                break
            logger.info(line.decode(errors="replace").rstrip())
        returncode = await process.wait()
    finally:
        # cancelled (Ctrl-C) while the child is still running
        if process.returncode is None:
            process.kill()
            await process.wait()

    if returncode != 0:
        raise CommandError(
            args,
            f"Error: {args[0]} exited with code {returncode}",
            returncode=returncode,
        )
