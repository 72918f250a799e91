import pytest

from hdimount import C_Mounter
from hdimount import hdimount

from conftest import FakeSyncRunner, entities


@pytest.fixture
def cli(hooks):
    runner = FakeSyncRunner()
    return runner, C_Mounter(syncrunner=runner, hooks=hooks)


def test_attach(cli, capsys):
    runner, mounter = cli
    assert hdimount.hdimount_entry(["attach", "-readonly", "-nobrowse", "test.dmg"], mounter) == 0

    assert runner.calls == [("hdiutil", ["attach", "-plist", "-readonly", "-nobrowse", "test.dmg"])]
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "/dev/disk42\tGUID_partition_scheme"
    assert out[1] == "/dev/disk42s1\tApple_HFS\t/Volumes/test-disk-image"
    assert out[2].endswith("eject with: hdimount eject /dev/disk42")


def test_attach_dash_path(cli):
    runner, mounter = cli
    assert hdimount.hdimount_entry(["attach", "-x.dmg"], mounter) == 0
    assert runner.calls[0][1] == ["attach", "-plist", "./-x.dmg"]


def test_attach_leaves_image_attached(cli, hooks):
    runner, mounter = cli
    hdimount.hdimount_entry(["ATTACH", "test.dmg"], mounter)
    assert runner.verbs() == ["attach"]
    assert len(hooks) == 0


def test_attach_nothing_to_eject(hooks, capsys):
    mounter = C_Mounter(syncrunner=FakeSyncRunner(attach=(0, entities().encode("utf-8"))), hooks=hooks)
    assert hdimount.hdimount_entry(["attach", "test.dmg"], mounter) == 0
    assert "eject with" not in capsys.readouterr().out


@pytest.mark.parametrize("verb", ["eject", "detach"])
def test_eject(cli, verb):
    runner, mounter = cli
    assert hdimount.hdimount_entry([verb, "-force", "/dev/disk42"], mounter) == 0
    assert runner.calls == [("hdiutil", ["eject", "-force", "/dev/disk42"])]


@pytest.mark.parametrize("argv", [
    [],
    ["attach"],
    ["attach", "a.dmg", "b.dmg"],
    ["eject", "-force"],
    ["mount", "a.dmg"],
])
def test_usage(cli, argv):
    runner, mounter = cli
    assert hdimount.hdimount_entry(argv, mounter) == 1
    assert runner.calls == []


def test_failure(hooks, capsys):
    mounter = C_Mounter(syncrunner=FakeSyncRunner(attach=(1, b"")), hooks=hooks)
    assert hdimount.hdimount_entry(["attach", "test.dmg"], mounter) == 1
    out = capsys.readouterr().out
    assert "exception 1:Attach failed: hdiutil exit code: 1" in out


def test_split_args():
    assert hdimount.split_args(["-force", "-disk", "x"], hdimount.EJECT_FLAGS) == (["-force"], ["-disk", "x"])
