"""
Settings Switch Registry Module.

Provides the persistent configuration registry and apply/rollback workflow.
"""

__all__ = [
    "ConfigRegistry",
]

from settings_switch.registry.manager import ConfigRegistry
