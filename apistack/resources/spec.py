from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .descriptor import ResourceDescriptor, ResourceKind


@dataclass(frozen=True)
class DeploymentSpec:
    """Finalized descriptors for a single API deployment."""
    workload: ResourceDescriptor
    network_service: ResourceDescriptor
    extras: Tuple[ResourceDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.workload is None or self.network_service is None:
            raise ValueError("workload and network_service are required")
        object.__setattr__(self, "extras", tuple(self.extras))

    def descriptors(self) -> List[ResourceDescriptor]:
        """Workload, network service, then extras in attachment order."""
        return [self.workload, self.network_service, *self.extras]

    def find(self, kind: ResourceKind) -> List[ResourceDescriptor]:
        return [d for d in self.descriptors() if d.kind == ResourceKind(kind)]

    def get(self, name: str) -> Optional[ResourceDescriptor]:
        for descriptor in self.descriptors():
            if descriptor.name == name:
                return descriptor
        return None
