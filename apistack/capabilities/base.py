"""
Base capability interface and the values exchanged during resolution.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Tuple

from ..resources import ResourceDescriptor
from ..settings import Settings


@dataclass(frozen=True)
class ResolutionContext:
    """What a capability may know about the deployment it is attached to."""
    app: str                    # deployment (API) name, also the workload name
    port: int                   # primary container port
    settings: Settings
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class CapabilityResolution:
    """Output of resolving one capability."""
    descriptors: Tuple[ResourceDescriptor, ...] = ()  # auxiliary resources, appended to extras
    environment: Dict[str, str] = field(default_factory=dict)  # merged into the workload env


class CapabilityRequest(ABC):
    """Abstract base class for optional, composable deployment capabilities."""

    @property
    @abstractmethod
    def kind(self) -> str:
        """
        Capability kind. At most one request per kind may be attached
        to a builder.
        """
        pass

    @abstractmethod
    def resolve(self, context: ResolutionContext) -> CapabilityResolution:
        """
        Translate the request into descriptors and an environment fragment.

        Args:
            context: ResolutionContext for the deployment being built

        Returns:
            CapabilityResolution for this capability

        Raises:
            CapabilityResolutionError: If the request cannot be translated
        """
        pass
