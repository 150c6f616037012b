"""
Immutable resource descriptors.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping

from pydantic import SecretStr

REDACTED = "[REDACTED]"


class ResourceKind(str, Enum):
    WORKLOAD = "Workload"
    NETWORK_SERVICE = "NetworkService"
    MANAGED_DATABASE = "ManagedDatabase"
    CREDENTIAL = "Credential"


def freeze(value: Any) -> Any:
    """Recursively turn dicts into read-only mappings and lists into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any, reveal_secrets: bool = False) -> Any:
    """Inverse of freeze(), producing plain dicts/lists for serialization."""
    if isinstance(value, Mapping):
        return {k: thaw(v, reveal_secrets) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v, reveal_secrets) for v in value]
    if isinstance(value, SecretStr):
        return value.get_secret_value() if reveal_secrets else REDACTED
    return value


def _hashable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return frozenset((k, _hashable(v)) for k, v in value.items())
    if isinstance(value, tuple):
        return tuple(_hashable(v) for v in value)
    return value


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    One desired cloud resource.

    Secret values are held as SecretStr and are the only values redacted
    when printed or rendered; `sensitive` tells emitters to route the
    descriptor to a secret backend.
    """
    kind: ResourceKind
    name: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    sensitive: bool = False

    def __post_init__(self):
        # frozen dataclass: bypass __setattr__ to store the frozen copy
        object.__setattr__(self, "kind", ResourceKind(self.kind))
        object.__setattr__(self, "fields", freeze(dict(self.fields)))

    def __hash__(self) -> int:
        return hash((self.kind, self.name, _hashable(self.fields), self.sensitive))

    def __repr__(self) -> str:
        return (f"ResourceDescriptor(kind={self.kind.value}, name={self.name!r}, "
                f"fields={thaw(self.fields)!r}, sensitive={self.sensitive})")

    __str__ = __repr__

    def to_dict(self, reveal_secrets: bool = False) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "sensitive": self.sensitive,
            "fields": thaw(self.fields, reveal_secrets),
        }
