#!/usr/bin/env python3

import shlex
import threading
from contextlib import contextmanager

from hdimount.defaults import C_MounterDefaults, DefaultMessageHandler
from hdimount.devices import parseDevices, findRootDevice
from hdimount.errors import AttachFailed, EjectFailed
from hdimount.runner import C_ProcessRunner, C_SyncProcessRunner
from hdimount.shutdown import HOOKS

"""
The C_Mounter class attaches and ejects disk images by running hdiutil. Both verbs
come in an asyncio flavor (attach, eject) and a blocking flavor (attachSync,
ejectSync); they build the same arguments and parse the output the same way, the
only difference is how the process is waited on.

Attaching gives you back a C_AttachInfo, which has the device list hdiutil
reported, and an eject() method that detaches the whole image via its root
device. That eject() only ever runs once; after that it's a no-op.

If you pass shutdown eject options to attach, the image is also ejected when the
process exits normally, unless you've already ejected it yourself by then.

@TODO: Encrypted images make hdiutil prompt for a passphrase. There's no way to
        pass one in yet (hdiutil supports -stdinpass for that).
"""

class C_AttachOptions:
    """Options for attach. Everything defaults to False.

    readonly - Force the devices to be read-only (-readonly)
    nobrowse - Hide the mounted volumes from applications like Finder (-nobrowse)
    """
    def __init__(self, readonly=False, nobrowse=False):
        self.readonly = readonly
        self.nobrowse = nobrowse

class C_EjectOptions:
    """Options for eject.

    force - Forcibly detach (-force), defaults to False
    """
    def __init__(self, force=False):
        self.force = force

def fileArg(file):
    """Make sure a path can't be mistaken for an option by hdiutil."""
    return './' + file if file.startswith('-') else file

def buildAttachArgs(file, options=None):
    args = ['attach', '-plist']
    if options is not None:
        if options.readonly:
            args.append('-readonly')
        if options.nobrowse:
            args.append('-nobrowse')
    args.append(fileArg(file))
    return args

def buildEjectArgs(target, options=None):
    args = ['eject']
    if options is not None and options.force:
        args.append('-force')
    args.append(fileArg(target))
    return args

class C_AttachInfo:
    """
    What you get back from C_Mounter.attach():

    devices - List of C_Device, in the order hdiutil reported them
    root - The C_Device that eject() will use, or None if there weren't any
    """
    def __init__(self, mounter, devices, shutdownEject=None):
        self.mounter = mounter
        self.devices = devices
        self.root = findRootDevice(devices)

        self.lock = threading.Lock()
        self.target = self.root.devEntry if self.root else None
        self.shutdownOptions = shutdownEject
        self.hook = None

        if shutdownEject is not None and self.target is not None:
            # Keep a reference, since every self.shutdown access makes a new bound method
            self.hook = self.shutdown
            mounter.hooks.register(self.hook)

    def ejected(self):
        """True once eject has been called (or if there was never anything to eject)."""
        return self.target is None

    def release(self):
        """Returns the device to eject, and forgets about it, so that any other
        call to eject (including the shutdown hook) does nothing. Returns None
        if that already happened."""
        with self.lock:
            target = self.target
            if target is None:
                return None

            if self.hook is not None:
                self.mounter.hooks.unregister(self.hook)
                self.hook = None
            self.target = None

        return target

    async def eject(self, options=None):
        """Eject the whole image, via the root device."""
        target = self.release()
        if target is None:
            return
        await self.mounter.eject(target, options)

    def ejectSync(self, options=None):
        target = self.release()
        if target is None:
            return
        self.mounter.ejectSync(target, options)

    async def shutdown(self):
        await self.eject(self.shutdownOptions)

class C_Mounter:
    """
    This class contains all of the methods for attaching and ejecting disk images
    with hdiutil.

    attach - attach an image, returning a C_AttachInfo
    eject - eject a device node or a mount point
    attached - context manager that attaches an image, and always ejects it
    """
    def __init__(self, hdiutil=None, runner=None, syncrunner=None, hooks=None, message=DefaultMessageHandler):
        """Constructor for the C_Mounter class.

        hdiutil - Path to hdiutil, defaults to the one on the PATH
        runner - Object whose async run(command, args) runs hdiutil
        syncrunner - Object whose blocking run(command, args) runs hdiutil
        hooks - C_ShutdownHooks for shutdown ejects, defaults to the process-wide one
        message - A function that is called with a string to print various status messages
        """
        self._hdiutil = hdiutil or C_MounterDefaults().HDIUtilPath()
        self.runner = runner if runner is not None else C_ProcessRunner()
        self.syncrunner = syncrunner if syncrunner is not None else C_SyncProcessRunner()
        self.hooks = hooks if hooks is not None else HOOKS
        self.msgout = message

    @property
    def hdiutil(self):
        """The path to hdiutil."""
        return self._hdiutil

    def commandStr(self, args):
        return shlex.join([self._hdiutil] + args)

    def attachResult(self, rc, stdout):
        if rc:
            self.msgout('attach failed with exit code %d' % rc)
            raise AttachFailed(rc)
        return parseDevices(stdout)

    def ejectResult(self, rc):
        if rc:
            self.msgout('eject failed with exit code %d' % rc)
            raise EjectFailed(rc)

    async def attach(self, file, options=None, shutdownEject=None):
        """Attach a disk image.

        file - Path to the disk image
        options - C_AttachOptions, or None for the defaults
        shutdownEject - C_EjectOptions to eject the image with when the process
                        exits, or None to leave it attached
        """
        args = buildAttachArgs(file, options)

        self.msgout('attaching disk image: %s' % self.commandStr(args))
        rc, stdout = await self.runner.run(self._hdiutil, args)

        return C_AttachInfo(self, self.attachResult(rc, stdout), shutdownEject)

    def attachSync(self, file, options=None, shutdownEject=None):
        args = buildAttachArgs(file, options)

        self.msgout('attaching disk image: %s' % self.commandStr(args))
        rc, stdout = self.syncrunner.run(self._hdiutil, args)

        return C_AttachInfo(self, self.attachResult(rc, stdout), shutdownEject)

    async def eject(self, target, options=None):
        """Eject a disk image.

        target - Path to a device file or a volume mount point
        options - C_EjectOptions, or None for the defaults
        """
        args = buildEjectArgs(target, options)

        self.msgout('ejecting disk image: %s' % self.commandStr(args))
        rc, _ = await self.runner.run(self._hdiutil, args)

        self.ejectResult(rc)

    def ejectSync(self, target, options=None):
        args = buildEjectArgs(target, options)

        self.msgout('ejecting disk image: %s' % self.commandStr(args))
        rc, _ = self.syncrunner.run(self._hdiutil, args)

        self.ejectResult(rc)

    @contextmanager
    def attached(self, file, options=None, ejectOptions=None):
        """Attach the image for the duration of a with block, yielding the C_AttachInfo."""
        info = self.attachSync(file, options)
        try:
            yield info
        finally:
            info.ejectSync(ejectOptions)

    detach = eject
    detachSync = ejectSync

if __name__ == "__main__":
    import sys
    import pprint

    mounter = C_Mounter(message=print)
    with mounter.attached(sys.argv[1], C_AttachOptions(readonly=True, nobrowse=True)) as info:
        pp = pprint.PrettyPrinter(indent=4)
        pp.pprint(info.devices)
