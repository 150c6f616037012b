"""
apistack - Declarative builder for API deployments.

Composes a container workload, its network service and optional managed
capabilities (such as a relational database with a generated credential)
into a single DeploymentSpec handed to a provisioning emitter.
"""

__version__ = "0.1.0"

from .builder import APIBuilder, BaseParams, create
from .capabilities import AttachManagedDatabase, CapabilityRequest, DatabaseSize, SetEnvironment
from .emit import Emitter, ManifestEmitter, RecordingEmitter, to_manifest
from .errors import (
    ApiStackError,
    BuilderConsumedError,
    CapabilityResolutionError,
    CredentialGenerationError,
    DuplicateCapabilityError,
    InvalidConfigurationError,
)
from .resources import DeploymentSpec, ResourceDescriptor, ResourceKind
from .settings import BuildContext, Settings

__all__ = [
    "APIBuilder",
    "BaseParams",
    "create",
    "AttachManagedDatabase",
    "CapabilityRequest",
    "DatabaseSize",
    "SetEnvironment",
    "Emitter",
    "ManifestEmitter",
    "RecordingEmitter",
    "to_manifest",
    "ApiStackError",
    "BuilderConsumedError",
    "CapabilityResolutionError",
    "CredentialGenerationError",
    "DuplicateCapabilityError",
    "InvalidConfigurationError",
    "DeploymentSpec",
    "ResourceDescriptor",
    "ResourceKind",
    "BuildContext",
    "Settings",
]
