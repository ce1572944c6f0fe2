from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_DOMAIN = "fasti.sh"


class ConfigError(Exception):
    """Raised when a required startup input is missing."""


@dataclass(frozen=True)
class DeploymentContext:
    deployment_id: str
    region: str
    domain: str

    @property
    def prefix(self) -> str:
        return f"{self.deployment_id}-webapp"

    def resource_name(self, suffix: str) -> str:
        return f"{self.prefix}-{suffix}"


def deployment_id_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    deployment_id = environ.get("DEPLOYMENT_ID", "").strip()
    if not deployment_id:
        raise ConfigError("DEPLOYMENT_ID environment variable is required")
    return deployment_id


def domain_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return environ.get("DOMAIN") or DEFAULT_DOMAIN
