import pytest

from hdimount import C_Mounter, C_ShutdownHooks

ATTACH_PLIST = b"""<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
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
            <key>unmapped-content-hint</key>
            <string>GUID_partition_scheme</string>
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
            <key>unmapped-content-hint</key>
            <string>00000000-0000-0000-0000-000000000000</string>
            <key>volume-kind</key>
            <string>hfs</string>
        </dict>
    </array>
</dict>
</plist>
"""


def plist(body):
    """Wrap a plist body (the part inside <plist>) in the usual header."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" '
        '"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
        '<plist version="1.0">\n%s\n</plist>\n' % body
    )


def entities(*dicts):
    return plist("<dict><key>system-entities</key><array>%s</array></dict>" % "".join(dicts))


class FakeSyncRunner:
    """Stands in for hdiutil. Replies to each verb with a canned (exitcode, stdout)."""

    def __init__(self, attach=(0, ATTACH_PLIST), eject=(0, b"")):
        self.replies = {"attach": attach, "eject": eject}
        self.calls = []

    def run(self, command, args):
        self.calls.append((command, list(args)))
        return self.replies[args[0]]

    def verbs(self):
        return [args[0] for _, args in self.calls]

    def args(self, verb):
        return [args for _, args in self.calls if args[0] == verb]


class FakeRunner(FakeSyncRunner):
    async def run(self, command, args):
        return FakeSyncRunner.run(self, command, args)


@pytest.fixture
def hooks():
    return C_ShutdownHooks(autoinstall=False)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def syncrunner():
    return FakeSyncRunner()


@pytest.fixture
def mounter(runner, syncrunner, hooks):
    return C_Mounter(runner=runner, syncrunner=syncrunner, hooks=hooks)
