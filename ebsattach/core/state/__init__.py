"""
State: modelos del terraform.tfstate y localización de recursos.
"""

from ebsattach.core.state.models import (
    InstanceState,
    ModuleState,
    ResourceState,
    StateDocument,
    to_data,
    to_json,
)
from ebsattach.core.state.locator import Location, locate, resource_key

__all__ = [
    "InstanceState",
    "ModuleState",
    "ResourceState",
    "StateDocument",
    "to_data",
    "to_json",
    "Location",
    "locate",
    "resource_key",
]
