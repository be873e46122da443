from __future__ import annotations
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.

"""Shell command runner with a bounded output buffer.

Commands run through the host shell with stdin closed (the server's own
stdin is the protocol stream).  stdout and stderr are drained concurrently;
once their combined size passes the cap the whole process group is killed
and the call fails.  There is no timeout.
"""

import asyncio
import logging
import os
import signal
from dataclasses import dataclass
from pathlib import Path

from demoapp.config import DEFAULT_MAX_OUTPUT_BYTES
from demoapp.exceptions import ProcessError

logger = logging.getLogger("demoapp.process")

_READ_CHUNK = 64 * 1024
_POSIX = os.name == "posix"


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


def _decode(data: bytes | bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        if _POSIX:
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        pass


async def run_shell_command(
    command: str,
    *,
    cwd: Path,
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
) -> CommandResult:
    """Run *command* in *cwd* and return its decoded output.

    Raises:
        ProcessError: the command could not be started, exited non-zero,
            was killed by a signal, or overflowed *max_output_bytes*.
            Output captured up to that point is kept on the error.
    """
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            cwd=str(cwd),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=_POSIX,
        )
    except OSError as exc:
        raise ProcessError(
            f"Failed to start command: {exc.strerror or exc}",
        ) from exc

    if proc.stdout is None or proc.stderr is None:
        _kill(proc)
        raise ProcessError(f"Command output pipes unavailable: {command}")

    stdout_buf = bytearray()
    stderr_buf = bytearray()
    overflowed = False

    async def _drain(stream: asyncio.StreamReader, buf: bytearray) -> None:
        nonlocal overflowed
        while not overflowed:
            chunk = await stream.read(_READ_CHUNK)
            if not chunk:
                return
            buf.extend(chunk)
            if len(stdout_buf) + len(stderr_buf) > max_output_bytes:
                overflowed = True
                _kill(proc)

    await asyncio.gather(
        _drain(proc.stdout, stdout_buf),
        _drain(proc.stderr, stderr_buf),
    )
    returncode = await proc.wait()

    stdout = _decode(stdout_buf[:max_output_bytes])
    stderr = _decode(stderr_buf[:max_output_bytes])
    logger.info("execute_command cmd=%s rc=%d", command[:80], returncode)

    if overflowed:
        raise ProcessError(
            f"Command output exceeded {max_output_bytes} bytes: {command}",
            exit_code=returncode,
            stdout=stdout,
            stderr=stderr,
        )
    if returncode < 0:
        raise ProcessError(
            f"Command terminated by signal {-returncode}: {command}",
            exit_code=returncode,
            stdout=stdout,
            stderr=stderr,
        )
    if returncode != 0:
        raise ProcessError(
            f"Command failed with exit code {returncode}: {command}",
            exit_code=returncode,
            stdout=stdout,
            stderr=stderr,
        )
    return CommandResult(returncode=returncode, stdout=stdout, stderr=stderr)
