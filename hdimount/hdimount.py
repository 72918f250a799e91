#!/usr/bin/env python3

import sys

import kenl380.pylib as pylib

def context(varfile=None):
    """returns the context object for this script."""

    try:
        myself = __file__
    except NameError:
        myself = sys.argv[0]

    return pylib.context(myself,varfile)

me = context('hdimount')

def message(msgstr): print ('%s: %s' % (me.alias(),msgstr))

from hdimount.errors import Error
from hdimount.mounter import C_Mounter, C_AttachOptions, C_EjectOptions

ATTACH_FLAGS = ['-readonly', '-nobrowse']
EJECT_FLAGS = ['-force']

def usage():
    message("usage: hdimount attach [-readonly] [-nobrowse] image")
    message("       hdimount eject [-force] device-or-mount-point")
    return 1

def split_args(args, known):
    """Pull the flags we know about out of args. Returns (flags, paths).
    Paths that start with '-' are fine, as long as they aren't one of our flags."""
    flags = [a for a in args if a in known]
    paths = [a for a in args if a not in known]
    return flags, paths

def attach(mounter, args):
    flags, paths = split_args(args, ATTACH_FLAGS)
    if len(paths) != 1: return usage()

    options = C_AttachOptions(readonly='-readonly' in flags, nobrowse='-nobrowse' in flags)
    info = mounter.attachSync(paths[0], options)

    for device in info.devices:
        line = '%s\t%s' % (device.devEntry, device.contentHint or '')
        if device.mountPoint:
            line += '\t%s' % device.mountPoint
        print(line)

    if info.root is not None:
        message('eject with: hdimount eject %s' % info.root.devEntry)
    return 0

def eject(mounter, args):
    flags, paths = split_args(args, EJECT_FLAGS)
    if len(paths) != 1: return usage()

    mounter.ejectSync(paths[0], C_EjectOptions(force='-force' in flags))
    return 0

VERBS = {
    'attach': attach,
    'eject': eject,
    'detach': eject,
}

def hdimount_entry(argv=None, mounter=None):
    # assume we have no arguments, but if we do, pass them along
    args = sys.argv[1:] if argv is None else list(argv)

    if len(args) < 1: return usage()

    verb = args[0].lower()

    if verb not in VERBS:
        message("Could be me, but I don't know how to '%s'" % verb)
        return usage()

    if mounter is None:
        mounter = C_Mounter(message=message)

    try:
        return VERBS[verb](mounter, args[1:])
    except Error as e:
        message("hdiutil threw exception %d:%s" % (e.errno, e.errmsg))
        return 1

if __name__ == '__main__':
    from sys import exit
    exit(hdimount_entry())
