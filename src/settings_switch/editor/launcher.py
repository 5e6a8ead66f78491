"""
Editor bridge - open a file in the user's editor and wait for it to exit.

The editor comes from $VISUAL or $EDITOR, falling back to the first program
found on PATH from a per-platform list.
"""

import logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path

from settings_switch.core.exceptions import EditorFailedError, EditorNotFoundError

logger = logging.getLogger(__name__)

EDITOR_ENV_VARS = ("VISUAL", "EDITOR")

FALLBACK_EDITORS = {
    "win32": ("code", "notepad++", "notepad"),
    "darwin": ("code", "vim", "nano", "emacs"),
    "linux": ("code", "vim", "nano", "emacs", "gedit"),
}


def fallback_editors(platform: str | None = None) -> tuple[str, ...]:
    """Known editor programs for a platform, in preference order."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return FALLBACK_EDITORS["win32"]
    if platform == "darwin":
        return FALLBACK_EDITORS["darwin"]
    return FALLBACK_EDITORS["linux"]


def resolve_editor(
    env: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> list[str] | None:
    """
    Resolve the editor command line.

    Returns:
        The command as an argv prefix, or None when nothing is available
    """
    env = os.environ if env is None else env

    for var in EDITOR_ENV_VARS:
        value = env.get(var, "").strip()
        if value:
            logger.debug(f"Using editor from ${var}: {value}")
            return shlex.split(value, posix=not (platform or sys.platform).startswith("win"))

    for program in fallback_editors(platform):
        if shutil.which(program):
            logger.debug(f"Using fallback editor: {program}")
            return [program]

    return None


def is_editor_available(env: Mapping[str, str] | None = None) -> bool:
    """Check whether an editor can be resolved."""
    return resolve_editor(env) is not None


def open_editor(path: Path, env: Mapping[str, str] | None = None) -> None:
    """
    Open path in the editor and block until the editor exits.

    Raises:
        EditorNotFoundError: If no editor is available
        EditorFailedError: If the editor cannot be started or exits non-zero
    """
    command = resolve_editor(env)
    if not command:
        raise EditorNotFoundError()

    argv = [*command, str(path)]
    try:
        result = subprocess.run(argv, check=False, shell=False)
    except OSError as e:
        raise EditorFailedError(
            f"Failed to start editor: {e.strerror or e}",
            editor=command[0],
        ) from e

    if result.returncode != 0:
        raise EditorFailedError(editor=command[0], returncode=result.returncode)
