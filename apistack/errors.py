"""
Error types raised while finalizing an API deployment.
"""

from typing import List, Optional


class ApiStackError(Exception):
    """Base class for all builder errors."""


class InvalidConfigurationError(ApiStackError, ValueError):
    """Base parameters (or settings) are invalid."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class DuplicateCapabilityError(ApiStackError):
    """The same capability kind was attached more than once."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Capability '{kind}' attached more than once")


class CapabilityResolutionError(ApiStackError):
    """A capability could not be translated into descriptors."""

    def __init__(self, message: str, kind: Optional[str] = None):
        self.kind = kind
        super().__init__(message)


class CredentialGenerationError(ApiStackError, RuntimeError):
    """The secure random source failed. Not recoverable."""


class BuilderConsumedError(ApiStackError):
    """The builder was already finalized by a successful build()."""
