"""
Resource descriptors and the deployment spec that aggregates them.
"""

from .descriptor import REDACTED, ResourceDescriptor, ResourceKind
from .spec import DeploymentSpec

__all__ = [
    "REDACTED",
    "ResourceDescriptor",
    "ResourceKind",
    "DeploymentSpec",
]
