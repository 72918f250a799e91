#!/usr/bin/env python3

"""
The exception classes raised by the hdimount modules. Every one of them derives
from Error, so a caller that doesn't care about the details can just catch that.

Like the old VaultError, each exception carries an errno and an errmsg, so the
console script can print them the same way no matter what went wrong.
"""

class Error(Exception):
    """Base exception class for this package."""
    def __init__(self, errno, errmsg):
        super().__init__(errmsg)
        self.errno = errno
        self.errmsg = errmsg

class ProcessLaunchError(Error):
    """hdiutil couldn't be started at all (not found, not executable, etc.)"""
    def __init__(self, command, reason):
        super().__init__(-1, "Unable to run '%s': %s" % (command, reason))
        self.command = command

class AttachFailed(Error):
    """hdiutil attach ran, but returned a non-zero exit code."""
    def __init__(self, exitcode):
        super().__init__(exitcode, 'Attach failed: hdiutil exit code: %d' % exitcode)
        self.exitcode = exitcode

class EjectFailed(Error):
    """hdiutil eject ran, but returned a non-zero exit code."""
    def __init__(self, exitcode):
        super().__init__(exitcode, 'Eject failed: hdiutil exit code: %d' % exitcode)
        self.exitcode = exitcode

class ParseError(Error):
    """The plist that came back from hdiutil attach wasn't what we expected.

    path - which part of the plist was bad, e.g. 'root', 'system-entities' or
           'system-entities > * > dev-entry'
    """
    def __init__(self, path):
        super().__init__(-2, 'Error parsing hdiutil plist: %s' % path)
        self.path = path
