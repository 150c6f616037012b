"""
Fluent builder for one API deployment.

    spec = (
        create("my-api", "my-api-image", 80, replicas=2)
        .attach_managed_database(size="micro")
        .build(context)
    )

Chained calls only record intent. All validation happens in build(), once
the full set of capabilities is known, so attachment order never matters
for validity. It does matter for environment merging: later capabilities
override keys set by earlier ones.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from .capabilities import (
    AttachManagedDatabase,
    CapabilityRequest,
    ResolutionContext,
    SetEnvironment,
)
from .emit import Emitter
from .errors import (
    ApiStackError,
    BuilderConsumedError,
    CapabilityResolutionError,
    DuplicateCapabilityError,
    InvalidConfigurationError,
)
from .redact import redact_env
from .resources import DeploymentSpec, ResourceDescriptor, ResourceKind
from .settings import BuildContext
from .tags import DNS_LABEL_MAX, base_labels, is_dns_label

logger = logging.getLogger(__name__)

MAX_PORT = 65535


@dataclass(frozen=True)
class BaseParams:
    name: str
    image: str
    port: int
    replicas: int = 1


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_base_params(params: BaseParams, context: BuildContext) -> List[str]:
    """Return every problem with the base parameters (empty when valid)."""
    problems = []

    if not isinstance(params.name, str) or not params.name:
        problems.append("name must be a non-empty string")
    elif not is_dns_label(params.name):
        problems.append(
            f"name '{params.name}' must be a DNS label: lowercase letters, digits and '-', "
            f"at most {DNS_LABEL_MAX} characters, starting and ending with a letter or digit"
        )
    elif params.name in context.reserved_names:
        problems.append(f"name '{params.name}' is already in use in namespace '{context.effective_namespace}'")

    if not isinstance(params.image, str) or not params.image.strip():
        problems.append("image must be a non-empty string")

    if not _is_int(params.port) or not 0 < params.port <= MAX_PORT:
        problems.append(f"port must be an integer in 1..{MAX_PORT}, got {params.port!r}")

    if not _is_int(params.replicas) or params.replicas < 1:
        problems.append(f"replicas must be an integer >= 1, got {params.replicas!r}")

    return problems


class APIBuilder:
    """
    Accumulates the description of one API and its infrastructure dependencies.

    The builder is consumed by a successful build(); a failed build leaves it
    usable so the caller can fix the configuration and retry. Not thread-safe.
    """

    def __init__(self, name: str, image: str, port: int, replicas: int = 1):
        self.params = BaseParams(name=name, image=image, port=port, replicas=replicas)
        self._capabilities: List[CapabilityRequest] = []
        self._consumed = False

    def __repr__(self) -> str:
        kinds = [c.kind for c in self._capabilities]
        return f"APIBuilder({self.params!r}, capabilities={kinds!r}, consumed={self._consumed})"

    @property
    def capabilities(self) -> List[CapabilityRequest]:
        return list(self._capabilities)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _check_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(f"Builder for '{self.params.name}' was already built")

    def attach(self, capability: CapabilityRequest) -> "APIBuilder":
        """Append any capability request. Validation is deferred to build()."""
        self._check_open()
        if not isinstance(capability, CapabilityRequest):
            raise TypeError(f"Expected a CapabilityRequest, got {type(capability).__name__}")
        self._capabilities.append(capability)
        return self

    def attach_managed_database(self, size="micro") -> "APIBuilder":
        return self.attach(AttachManagedDatabase(size=size))

    def set_environment(self, values: Mapping[str, object], label: str = "default") -> "APIBuilder":
        return self.attach(SetEnvironment(values=values, label=label))

    def build(self, context: Optional[BuildContext] = None, emitter: Optional[Emitter] = None) -> DeploymentSpec:
        """
        Validate, resolve capabilities and assemble the DeploymentSpec.

        Args:
            context: Explicit build context; read from the environment when omitted
            emitter: Optional collaborator that receives the finalized spec

        Returns:
            DeploymentSpec for this deployment

        Raises:
            InvalidConfigurationError: Bad base parameters
            DuplicateCapabilityError: Same capability kind attached twice
            CapabilityResolutionError: A capability cannot be translated
            CredentialGenerationError: Secure random source failed
            BuilderConsumedError: The builder was already built
        """
        self._check_open()
        context = context or BuildContext.default()

        try:
            spec = self._assemble(context)
        except ApiStackError as e:
            logger.warning(f"Build of '{self.params.name}' failed: {type(e).__name__}: {e}")
            raise

        if emitter is not None:
            emitter.emit(spec)

        self._consumed = True
        logger.info(f"Built deployment '{self.params.name}' with {len(spec.descriptors())} descriptors")
        return spec

    def _assemble(self, context: BuildContext) -> DeploymentSpec:
        problems = validate_base_params(self.params, context)
        if problems:
            raise InvalidConfigurationError(problems)

        seen = set()
        for capability in self._capabilities:
            if capability.kind in seen:
                raise DuplicateCapabilityError(capability.kind)
            seen.add(capability.kind)

        params = self.params
        settings = context.settings
        labels = base_labels(
            params.name,
            context.effective_namespace,
            deployment_id=context.deployment_id,
            extra=context.extra_labels,
        )
        resolution_context = ResolutionContext(
            app=params.name, port=params.port, settings=settings, labels=labels
        )

        env: Dict[str, str] = {}
        extras: List[ResourceDescriptor] = []
        for capability in self._capabilities:
            resolution = capability.resolve(resolution_context)
            logger.debug(f"Resolved capability {capability.kind}: "
                         f"{len(resolution.descriptors)} descriptors, {len(resolution.environment)} env keys")
            extras.extend(resolution.descriptors)
            for key, value in resolution.environment.items():
                if key in env:
                    logger.debug(f"{capability.kind} overrides env key {key}")
                logger.debug(f"env {key}={redact_env(key, value)}")
                env[key] = value

        workload = ResourceDescriptor(
            kind=ResourceKind.WORKLOAD,
            name=params.name,
            fields={
                "namespace": context.effective_namespace,
                "image": params.image,
                "replicas": params.replicas,
                "port": params.port,
                "env": env,
                "labels": labels,
            },
        )
        network_service = ResourceDescriptor(
            kind=ResourceKind.NETWORK_SERVICE,
            name=f"{params.name}-service",
            fields={
                "namespace": context.effective_namespace,
                "type": settings.service_type,
                "port": params.port,
                "target_port": params.port,
                "selector": {"app": labels["app"]},
                "labels": labels,
            },
        )

        spec = DeploymentSpec(workload=workload, network_service=network_service, extras=tuple(extras))

        names = set()
        too_long = []
        for descriptor in spec.descriptors():
            if descriptor.name in names:
                raise CapabilityResolutionError(f"Descriptor name '{descriptor.name}' is not unique")
            names.add(descriptor.name)
            if not is_dns_label(descriptor.name):
                too_long.append(
                    f"derived name '{descriptor.name}' ({descriptor.kind.value}) is not a DNS label of at most "
                    f"{DNS_LABEL_MAX} characters; shorten name '{params.name}'"
                )
        if too_long:
            raise InvalidConfigurationError(too_long)

        return spec


def create(name: str, image: str, port: int, replicas: int = 1) -> APIBuilder:
    """Start describing an API deployment. Nothing is validated until build()."""
    return APIBuilder(name, image, port, replicas)


__all__ = ["APIBuilder", "BaseParams", "create", "validate_base_params"]
