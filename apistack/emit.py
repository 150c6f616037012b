"""
Handoff of finalized specs to a provisioning emitter.

The emitter owns resource creation, drift detection and applying changes.
This module defines the contract plus two reference emitters: one that
records specs in memory and one that writes a redacted manifest.
"""

import json
import logging
import sys
from typing import Any, Dict, List, Protocol, TextIO, runtime_checkable

import yaml

from .resources import DeploymentSpec

logger = logging.getLogger(__name__)

FORMATS = ("yaml", "json")


@runtime_checkable
class Emitter(Protocol):
    def emit(self, spec: DeploymentSpec) -> None:
        ...


def to_manifest(spec: DeploymentSpec, reveal_secrets: bool = False) -> List[Dict[str, Any]]:
    """
    Render a spec as plain dicts in descriptor order.

    Args:
        spec: Finalized DeploymentSpec
        reveal_secrets: Include secret values; only for emitters that store
            them in a secret backend

    Returns:
        List of {"kind", "name", "sensitive", "fields"} dicts
    """
    return [d.to_dict(reveal_secrets=reveal_secrets) for d in spec.descriptors()]


def dump_manifest(spec: DeploymentSpec, fmt: str = "yaml") -> str:
    """Serialize the redacted manifest as YAML or JSON."""
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported manifest format: {fmt}. Expected one of {FORMATS}")

    manifest = {"resources": to_manifest(spec)}
    if fmt == "json":
        return json.dumps(manifest, indent=2)
    return yaml.safe_dump(manifest, sort_keys=False, default_flow_style=False)


class RecordingEmitter:
    """Keeps every emitted spec, in order."""

    def __init__(self):
        self.specs: List[DeploymentSpec] = []

    def emit(self, spec: DeploymentSpec) -> None:
        self.specs.append(spec)

    @property
    def last(self) -> DeploymentSpec:
        if not self.specs:
            raise LookupError("No spec has been emitted")
        return self.specs[-1]


class ManifestEmitter:
    """Writes a redacted manifest for each emitted spec to a text stream."""

    def __init__(self, stream: TextIO = None, fmt: str = "yaml"):
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported manifest format: {fmt}. Expected one of {FORMATS}")
        self.stream = stream or sys.stdout
        self.fmt = fmt

    def emit(self, spec: DeploymentSpec) -> None:
        text = dump_manifest(spec, self.fmt)
        if self.fmt == "yaml":
            self.stream.write("---\n")
        self.stream.write(text)
        if not text.endswith("\n"):
            self.stream.write("\n")
        self.stream.flush()
        logger.debug(f"Wrote {self.fmt} manifest for {spec.workload.name}")
