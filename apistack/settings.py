"""
Settings for descriptor synthesis, read from APISTACK_* environment variables.
"""

import os
import random
import re
import string
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .errors import InvalidConfigurationError

SERVICE_TYPES = {"ClusterIP", "NodePort", "LoadBalancer"}
MIN_PASSWORD_LENGTH = 16

DEPLOYMENT_ID = re.compile(r"d-\d{8}-\d{6}-[a-z0-9]{4}")


def new_deployment_id() -> str:
    """Deployment ID of the form d-YYYYMMDD-hhmmss-xxxx, used as a label value."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=4))
    return f"d-{datetime.now():%Y%m%d-%H%M%S}-{suffix}"


def is_valid_deployment_id(deployment_id: str) -> bool:
    return bool(DEPLOYMENT_ID.fullmatch(deployment_id))


class Settings(BaseModel):
    namespace: str = "default"
    service_type: str = "ClusterIP"
    password_length: int = 24
    db_engine: str = "postgres"
    db_engine_version: str = "15"
    db_port: int = 5432
    db_username: str = "app"
    db_name: str = "app"

    @field_validator("password_length")
    @classmethod
    def _check_password_length(cls, v: int) -> int:
        if v < MIN_PASSWORD_LENGTH:
            raise ValueError(f"password_length must be at least {MIN_PASSWORD_LENGTH}")
        return v

    @field_validator("service_type")
    @classmethod
    def _check_service_type(cls, v: str) -> str:
        if v not in SERVICE_TYPES:
            raise ValueError(f"service_type must be one of {sorted(SERVICE_TYPES)}")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """
        Build settings from the environment.

        Only variables that are set override the defaults, e.g.
        APISTACK_NAMESPACE=payments or APISTACK_PASSWORD_LENGTH=32.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = f"APISTACK_{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        try:
            return cls(**values)
        except ValidationError as e:
            problems = [f"APISTACK_{str(err['loc'][0]).upper()}: {err['msg']}" for err in e.errors()]
            raise InvalidConfigurationError(problems) from e


@dataclass(frozen=True)
class BuildContext:
    """Explicit context handed to build() in place of any global provider state."""
    settings: Settings = field(default_factory=Settings)
    namespace: Optional[str] = None
    deployment_id: Optional[str] = None
    reserved_names: FrozenSet[str] = frozenset()  # names already taken in the namespace
    extra_labels: Dict[str, str] = field(default_factory=dict)

    @property
    def effective_namespace(self) -> str:
        return self.namespace or self.settings.namespace

    @classmethod
    def default(cls) -> "BuildContext":
        return cls(settings=Settings.from_env())
