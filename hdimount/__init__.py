"""Attach and eject macOS disk images with hdiutil."""

from hdimount.errors import Error, ProcessLaunchError, AttachFailed, EjectFailed, ParseError
from hdimount.devices import C_Device, parseDevices, findRootDevice
from hdimount.shutdown import C_ShutdownHooks, HOOKS
from hdimount.mounter import (
    C_Mounter,
    C_AttachInfo,
    C_AttachOptions,
    C_EjectOptions,
    buildAttachArgs,
    buildEjectArgs,
    fileArg,
)
