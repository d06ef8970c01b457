import shlex
import subprocess
from unittest import mock

import pytest

from voxelcore.filedialog import open_file_dialog, open_folder_dialog, shell_quote


def _only(tool):
    return lambda name: f"/usr/bin/{name}" if name == tool else None


def _done(code, out=""):
    return subprocess.CompletedProcess(args=[], returncode=code, stdout=out)


def test_shell_quote_plain():
    assert shell_quote("abc") == "'abc'"


def test_shell_quote_single_quote():
    assert shell_quote("it's") == "'it'\\''s'"


@pytest.mark.parametrize("text", ["", "a b", "it's", "$HOME; rm", "'''", "Files | *.png"])
def test_shell_quote_round_trip(text):
    assert shlex.split(shell_quote(text)) == [text]


@mock.patch("voxelcore.filedialog.shutil.which", return_value=None)
def test_no_tool_returns_none(_which):
    assert open_file_dialog("Pick") is None
    assert open_folder_dialog("Pick") is None


@mock.patch("voxelcore.filedialog.subprocess.run")
@mock.patch("voxelcore.filedialog.shutil.which", side_effect=_only("zenity"))
def test_zenity_file_dialog(_which, run):
    run.return_value = _done(0, "/tmp/world.data\r\n")
    assert open_file_dialog("My Title", "*.data") == "/tmp/world.data"
    args = run.call_args[0][0]
    assert args == [
        "zenity",
        "--file-selection",
        "--title=My Title",
        "--file-filter=Files | *.data",
        "--file-filter=All Files | *",
    ]


@mock.patch("voxelcore.filedialog.subprocess.run")
@mock.patch("voxelcore.filedialog.shutil.which", side_effect=_only("zenity"))
def test_zenity_default_title_without_filter(_which, run):
    run.return_value = _done(0, "/x\n")
    assert open_file_dialog() == "/x"
    assert run.call_args[0][0] == ["zenity", "--file-selection", "--title=Open File"]


@mock.patch("voxelcore.filedialog.subprocess.run")
@mock.patch("voxelcore.filedialog.shutil.which", side_effect=_only("zenity"))
def test_cancel_returns_none(_which, run):
    run.return_value = _done(1, "")
    assert open_file_dialog("Pick") is None


@mock.patch("voxelcore.filedialog.subprocess.run")
@mock.patch("voxelcore.filedialog.shutil.which", side_effect=_only("kdialog"))
def test_kdialog_file_dialog(_which, run):
    run.return_value = _done(0, "/home/a.png\n")
    assert open_file_dialog("Pick", "*.png") == "/home/a.png"
    assert run.call_args[0][0] == [
        "kdialog",
        "--getopenfilename",
        "/",
        "*.png",
        "--title",
        "Pick",
    ]


@mock.patch("voxelcore.filedialog.subprocess.run")
@mock.patch("voxelcore.filedialog.shutil.which", side_effect=_only("zenity"))
def test_zenity_folder_dialog(_which, run):
    run.return_value = _done(0, "/worlds\n")
    assert open_folder_dialog() == "/worlds"
    assert run.call_args[0][0] == [
        "zenity",
        "--file-selection",
        "--directory",
        "--title=Open Folder",
    ]


@mock.patch("voxelcore.filedialog.subprocess.run")
@mock.patch("voxelcore.filedialog.shutil.which", side_effect=_only("kdialog"))
def test_kdialog_folder_dialog(_which, run):
    run.return_value = _done(0, "/saves\n")
    assert open_folder_dialog("Where") == "/saves"
    assert run.call_args[0][0] == ["kdialog", "--getexistingdirectory", "/", "--title", "Where"]


@mock.patch("voxelcore.filedialog.subprocess.run", side_effect=OSError("gone"))
@mock.patch("voxelcore.filedialog.shutil.which", side_effect=_only("zenity"))
def test_launch_failure_returns_none(_which, _run):
    assert open_folder_dialog("Where") is None