"""
Optional capabilities that can be attached to an API deployment.
"""

from .base import CapabilityRequest, CapabilityResolution, ResolutionContext
from .database import AttachManagedDatabase, DatabaseSize
from .environment import SetEnvironment

__all__ = [
    "CapabilityRequest",
    "CapabilityResolution",
    "ResolutionContext",
    "AttachManagedDatabase",
    "DatabaseSize",
    "SetEnvironment",
]
