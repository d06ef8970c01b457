"""Native file and folder pickers through zenity or kdialog."""

from __future__ import annotations

import shutil
import subprocess
from typing import Optional


def shell_quote(text: str) -> str:
    """Wrap ``text`` in single quotes for a POSIX shell."""
    return "'" + text.replace("'", "'\\''") + "'"


def _run_dialog(args: list[str]) -> Optional[str]:
    try:
        result = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.rstrip("\r\n")


def open_file_dialog(
    title: Optional[str] = None, file_filter: Optional[str] = None
) -> Optional[str]:
    """Ask the user for a file; return its path, or ``None`` if cancelled or unavailable."""
    text = title if title is not None else "Open File"

    if shutil.which("zenity"):
        args = ["zenity", "--file-selection", f"--title={text}"]
        if file_filter:
            args += [f"--file-filter=Files | {file_filter}", "--file-filter=All Files | *"]
        return _run_dialog(args)

    if shutil.which("kdialog"):
        args = ["kdialog", "--getopenfilename", "/"]
        if file_filter:
            args.append(file_filter)
        args += ["--title", text]
        return _run_dialog(args)

    return None


def open_folder_dialog(title: Optional[str] = None) -> Optional[str]:
    """Ask the user for a folder; return its path, or ``None`` if cancelled or unavailable."""
    text = title if title is not None else "Open Folder"

    if shutil.which("zenity"):
        return _run_dialog(["zenity", "--file-selection", "--directory", f"--title={text}"])

    if shutil.which("kdialog"):
        return _run_dialog(["kdialog", "--getexistingdirectory", "/", "--title", text])

    return None