"""
Settings Switch Editor Module.

Launches the user's editor against a file.
"""

__all__ = [
    "open_editor",
    "resolve_editor",
    "is_editor_available",
    "fallback_editors",
]

from settings_switch.editor.launcher import (
    fallback_editors,
    is_editor_available,
    open_editor,
    resolve_editor,
)
