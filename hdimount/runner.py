#!/usr/bin/env python3

"""
The process runners the mounter uses to actually execute hdiutil. There's an
asyncio flavor and a blocking flavor, and both have the same single method:

    run(command, args) -> (exitcode, stdout)

stdout is always the complete output as bytes; nothing is parsed until the
process has exited. If you want to test the mounter without hdiutil, hand it
an object with a run() method that returns canned output.
"""

import asyncio
import subprocess

from hdimount.errors import ProcessLaunchError

class C_ProcessRunner:
    """Runs a command with asyncio, so the caller's task is suspended (not
    blocked) while hdiutil does its thing."""

    async def run(self, command, args):
        try:
            proc = await asyncio.create_subprocess_exec(
                command, *args,
                stdout=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProcessLaunchError(command, e.strerror or str(e)) from e

        stdout, _ = await proc.communicate()
        return proc.returncode, stdout

class C_SyncProcessRunner:
    """Same thing, but blocks until the command finishes."""

    def run(self, command, args):
        try:
            completed = subprocess.run([command] + list(args), stdout=subprocess.PIPE)
        except OSError as e:
            raise ProcessLaunchError(command, e.strerror or str(e)) from e

        return completed.returncode, completed.stdout
