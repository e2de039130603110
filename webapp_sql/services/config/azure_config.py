from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AzureConfig:
    """Service principal credentials and the target subscription.

    Each value is read from its short name (``CLIENT_ID``) first and then from the
    ``AZURE_``-prefixed name used by the Azure CLI/SDK tooling (``AZURE_CLIENT_ID``).
    """

    client_id: str
    client_secret: str
    tenant_id: str
    subscription_id: str

    @staticmethod
    def _required(name: str) -> str:
        value = (os.getenv(name) or os.getenv(f"AZURE_{name}") or "").strip()
        if not value:
            raise ValueError(f"Missing required environment variable: {name} (or AZURE_{name})")
        return value

    @staticmethod
    def from_env() -> "AzureConfig":
        return AzureConfig(
            client_id=AzureConfig._required("CLIENT_ID"),
            client_secret=AzureConfig._required("CLIENT_SECRET"),
            tenant_id=AzureConfig._required("TENANT_ID"),
            subscription_id=AzureConfig._required("SUBSCRIPTION_ID"),
        )

    @property
    def subscription_resource_id(self) -> str:
        return f"/subscriptions/{self.subscription_id}"

    def __repr__(self) -> str:
        return (
            f"AzureConfig(client_id={self.client_id!r}, client_secret='***', "
            f"tenant_id={self.tenant_id!r}, subscription_id={self.subscription_id!r})"
        )
