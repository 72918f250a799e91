#!/usr/bin/env python3

"""
This module turns the plist that 'hdiutil attach -plist' writes to stdout into a
list of C_Device objects, and knows how to pick the "root" device out of that
list, i.e. the whole-disk device that you eject to get rid of the entire image.

A typical response looks like this (trimmed):

    <dict>
        <key>system-entities</key>
        <array>
            <dict>
                <key>content-hint</key>
                <string>GUID_partition_scheme</string>
                <key>dev-entry</key>
                <string>/dev/disk42</string>
                <key>potentially-mountable</key>
                <false/>
            </dict>
            <dict>
                <key>content-hint</key>
                <string>Apple_HFS</string>
                <key>dev-entry</key>
                <string>/dev/disk42s1</string>
                <key>mount-point</key>
                <string>/Volumes/test-disk-image</string>
                <key>potentially-mountable</key>
                <true/>
                <key>volume-kind</key>
                <string>hfs</string>
            </dict>
        </array>
    </dict>
"""

from collections import namedtuple
from plistlib import loads

from hdimount.errors import ParseError

# The last four are None when hdiutil didn't report them at all.
C_Device = namedtuple('C_Device', [
    'devEntry',
    'potentiallyMountable',
    'contentHint',
    'unmappedContentHint',
    'volumeKind',
    'mountPoint',
], defaults=(None, None, None, None))

ENTITY = 'system-entities > *'

def entityProperty(entity, prop, kind):
    """Returns entity[prop], which has to be there and has to be a 'kind'."""
    value = entity.get(prop)
    if not isinstance(value, kind):
        raise ParseError('%s > %s' % (ENTITY, prop))
    return value

def entityPropertyNone(entity, prop, kind):
    """Like entityProperty(), but a missing key just gives you None back.
    If the key IS there, it still has to be the right type."""
    if prop in entity:
        return entityProperty(entity, prop, kind)
    return None

def loadPlist(xml):
    """Parses the raw hdiutil output (bytes or str), and returns the root
    dictionary. Anything that isn't a well formed plist dict is a ParseError."""
    try:
        if isinstance(xml, str):
            xml = bytes(xml, encoding='UTF-8')
        plist = loads(xml)
    except Exception as e:
        # plistlib raises all sorts of things on bad input, e.g. a bogus <date>
        raise ParseError('root') from e

    if not isinstance(plist, dict):
        raise ParseError('root')

    return plist

def parseDevices(xml):
    """Parse the attach plist into a list of C_Device objects.

    Returns:
        []   - If hdiutil didn't report any system entities. That's legal, you
               just won't have anything to eject.
        list - One C_Device per entity, in the order hdiutil listed them."""

    plist = loadPlist(xml)

    entities = plist.get('system-entities')
    if not isinstance(entities, list):
        raise ParseError('system-entities')

    devices = []
    for entity in entities:
        if not isinstance(entity, dict):
            raise ParseError(ENTITY)

        # An empty dev-entry is no better than a missing one, we can't eject it
        devEntry = entityProperty(entity, 'dev-entry', str)
        if not devEntry:
            raise ParseError('%s > dev-entry' % ENTITY)

        devices.append(C_Device(
            devEntry=devEntry,
            potentiallyMountable=entityProperty(entity, 'potentially-mountable', bool),
            contentHint=entityPropertyNone(entity, 'content-hint', str),
            unmappedContentHint=entityPropertyNone(entity, 'unmapped-content-hint', str),
            volumeKind=entityPropertyNone(entity, 'volume-kind', str),
            mountPoint=entityPropertyNone(entity, 'mount-point', str),
        ))

    return devices

def findRootDevice(devices):
    """Find the root device, i.e. the one with the shortest dev-entry.

    hdiutil lists the whole disk (/dev/disk42) along with each of its slices
    (/dev/disk42s1, ...), and the whole disk always has the shorter name. That's
    only a naming convention, not something hdiutil promises, so treat it as a
    heuristic if this is ever pointed at some other kind of device. When two
    entries are the same length the first one wins.

    Returns:
        None     - The list was empty
        C_Device - The root device"""

    root = None
    for device in devices:
        if root is None or len(device.devEntry) < len(root.devEntry):
            root = device
    return root

if __name__ == "__main__":
    import sys
    import pprint

    pp = pprint.PrettyPrinter(indent=4)
    devices = parseDevices(sys.stdin.buffer.read())
    pp.pprint(devices)
    print('root: %s' % findRootDevice(devices))
