"""
Front-end layer: configuration, data locations, theme preferences,
logging setup and the command-line interface.
"""

from .config import PortalConfig
from .preferences import PreferencesStore

__all__ = ["PortalConfig", "PreferencesStore"]
