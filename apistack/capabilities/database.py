"""
Managed relational database capability.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..credentials import make_credential
from ..errors import CapabilityResolutionError
from ..resources import ResourceDescriptor, ResourceKind
from .base import CapabilityRequest, CapabilityResolution, ResolutionContext

logger = logging.getLogger(__name__)

KIND = "managed_database"


class DatabaseSize(str, Enum):
    MICRO = "micro"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


INSTANCE_CLASSES = {
    DatabaseSize.MICRO: "db.t3.micro",
    DatabaseSize.SMALL: "db.t3.small",
    DatabaseSize.MEDIUM: "db.t3.medium",
    DatabaseSize.LARGE: "db.t3.large",
}

STORAGE_GB = {
    DatabaseSize.MICRO: 20,
    DatabaseSize.SMALL: 20,
    DatabaseSize.MEDIUM: 50,
    DatabaseSize.LARGE: 100,
}

URL_SCHEMES = {
    "postgres": "postgresql",
    "mysql": "mysql",
}


def credential_ref(credential_name: str, key: str = "password") -> str:
    return f"${{credential.{credential_name}.{key}}}"


def database_ref(database_name: str, attribute: str = "address") -> str:
    return f"${{database.{database_name}.{attribute}}}"


@dataclass(frozen=True)
class AttachManagedDatabase(CapabilityRequest):
    size: Union[DatabaseSize, str] = DatabaseSize.MICRO

    @property
    def kind(self) -> str:
        return KIND

    def _size(self) -> DatabaseSize:
        try:
            return DatabaseSize(self.size)
        except ValueError:
            valid = ", ".join(s.value for s in DatabaseSize)
            raise CapabilityResolutionError(
                f"Unknown database size '{self.size}'. Expected one of: {valid}", kind=KIND
            ) from None

    def resolve(self, context: ResolutionContext) -> CapabilityResolution:
        size = self._size()
        settings = context.settings

        scheme = URL_SCHEMES.get(settings.db_engine)
        if scheme is None:
            raise CapabilityResolutionError(f"Unsupported database engine '{settings.db_engine}'", kind=KIND)

        db_name = f"{context.app}-db"
        credential_name = f"{db_name}-credentials"

        credential = make_credential(
            credential_name,
            settings.db_username,
            length=settings.password_length,
            labels=context.labels,
        )

        database = ResourceDescriptor(
            kind=ResourceKind.MANAGED_DATABASE,
            name=db_name,
            fields={
                "engine": settings.db_engine,
                "engine_version": settings.db_engine_version,
                "instance_class": INSTANCE_CLASSES[size],
                "allocated_storage_gb": STORAGE_GB[size],
                "size": size.value,
                "database_name": settings.db_name,
                "port": settings.db_port,
                "username": settings.db_username,
                "credential_ref": credential_name,
                "labels": dict(context.labels),
            },
        )

        url = (
            f"{scheme}://{settings.db_username}:{credential_ref(credential_name)}"
            f"@{database_ref(db_name)}:{settings.db_port}/{settings.db_name}"
        )
        logger.debug(f"Resolved {KIND} for {context.app}: {INSTANCE_CLASSES[size]}")

        return CapabilityResolution(
            descriptors=(database, credential),
            environment={"DATABASE_URL": url},
        )
