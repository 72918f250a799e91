#!/usr/bin/env python3

"""
Shutdown hooks, used to auto-eject images that were attached with shutdown eject
options when the process exits normally.

A C_ShutdownHooks object is just a set of zero-argument coroutine functions.
When drain() is called, it snapshots the set, clears it, and then runs every
callback in the snapshot concurrently. Anything registered while a drain is in
progress waits for the next drain. A callback is never run twice.

HOOKS is the process-wide instance the mounter uses unless you give it a
different one. The first time something is registered on it, it hooks itself
into atexit, so the drain happens on the way out of the interpreter. Note that
atexit doesn't run when the process is killed by a signal, so neither do these.
"""

import asyncio
import atexit
import sys
import threading

from hdimount.defaults import DefaultMessageHandler

async def runHook(callback):
    """Calls the hook inside a coroutine, so that even a hook that blows up before
    it ever gets to await something only takes itself down."""
    return await callback()

class C_ShutdownHooks:
    def __init__(self, autoinstall=True, message=DefaultMessageHandler):
        """
        autoinstall - Register drain() with atexit the first time a hook is added
        message - A function that is called with a string to print status messages
        """
        self.hooks = set()
        self.lock = threading.Lock()
        self.autoinstall = autoinstall
        self.installed = False
        self.msgout = message

    def __len__(self):
        with self.lock:
            return len(self.hooks)

    def __contains__(self, callback):
        with self.lock:
            return callback in self.hooks

    def register(self, callback):
        with self.lock:
            if self.autoinstall and not self.installed:
                atexit.register(self.atexit)
                self.installed = True
            self.hooks.add(callback)

    def unregister(self, callback):
        """Removing something that isn't registered (anymore) is fine."""
        with self.lock:
            self.hooks.discard(callback)

    async def drain(self):
        """Run and forget every pending callback.

        Returns:
            list - One entry per callback that was run; None if it succeeded,
                   otherwise the exception it raised. One failure doesn't stop
                   the others from running."""

        with self.lock:
            pending = list(self.hooks)
            self.hooks.clear()

        if not pending:
            return []

        results = await asyncio.gather(*(runHook(f) for f in pending), return_exceptions=True)

        for result in results:
            if isinstance(result, BaseException):
                self.msgout('shutdown hook failed: %s' % result)

        return [r if isinstance(r, BaseException) else None for r in results]

    def atexit(self):
        # Nobody is left to catch these, so at least say something
        for result in asyncio.run(self.drain()):
            if result is not None:
                print('hdimount: shutdown eject failed: %s' % result, file=sys.stderr)

HOOKS = C_ShutdownHooks()
