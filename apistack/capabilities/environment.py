import re
from dataclasses import dataclass, field
from typing import Dict, Mapping

from ..errors import CapabilityResolutionError
from .base import CapabilityRequest, CapabilityResolution, ResolutionContext

ENV_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class SetEnvironment(CapabilityRequest):
    """Named overlay of plain environment variables for the workload."""
    values: Mapping[str, object] = field(default_factory=dict)
    label: str = "default"

    def __post_init__(self):
        object.__setattr__(self, "values", dict(self.values))

    @property
    def kind(self) -> str:
        return f"environment:{self.label}"

    def resolve(self, context: ResolutionContext) -> CapabilityResolution:
        bad = [k for k in self.values if not isinstance(k, str) or not ENV_KEY.match(k)]
        if bad:
            raise CapabilityResolutionError(
                f"Invalid environment variable name(s) in overlay '{self.label}': {', '.join(map(repr, bad))}",
                kind=self.kind,
            )
        env: Dict[str, str] = {k: str(v) for k, v in self.values.items()}
        return CapabilityResolution(environment=env)
