"""
Runtime: configuración y lectura/escritura del estado.
"""

from ebsattach.core.runtime.settings import ColorMode, Settings, load_settings
from ebsattach.core.runtime.storage import (
    STDIO,
    dump_state,
    parse_state,
    read_state,
    write_state,
    write_text,
)

__all__ = [
    "ColorMode",
    "Settings",
    "load_settings",
    "STDIO",
    "dump_state",
    "parse_state",
    "read_state",
    "write_state",
    "write_text",
]
