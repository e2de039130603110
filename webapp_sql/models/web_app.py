from __future__ import annotations

from typing import Any, Optional

from azure.mgmt.web.models import NameValuePair
from pydantic import BaseModel, Field


def split_ip_addresses(raw: Optional[str]) -> list[str]:
    """Split the provider's comma-separated address string, keeping its order."""

    if not raw:
        return []
    return [ip.strip() for ip in raw.split(",") if ip.strip()]


class AppSetting(BaseModel):
    name: str
    value: str

    def to_azure(self) -> NameValuePair:
        return NameValuePair(name=self.name, value=self.value)


class AppServicePlanItem(BaseModel):
    name: str = Field(..., description="App Service plan name")
    location: str
    id: Optional[str] = None
    sku_name: Optional[str] = None

    @staticmethod
    def from_azure(plan: Any) -> "AppServicePlanItem":
        sku = getattr(plan, "sku", None)
        return AppServicePlanItem(
            name=str(plan.name),
            location=str(plan.location),
            id=getattr(plan, "id", None),
            sku_name=getattr(sku, "name", None),
        )


class WebAppItem(BaseModel):
    name: str = Field(..., description="Web app (site) name")
    location: str
    id: Optional[str] = None
    state: Optional[str] = None
    default_host_name: Optional[str] = None
    outbound_ip_addresses: list[str] = Field(default_factory=list)

    @staticmethod
    def from_azure(site: Any) -> "WebAppItem":
        return WebAppItem(
            name=str(site.name),
            location=str(site.location),
            id=getattr(site, "id", None),
            state=getattr(site, "state", None),
            default_host_name=getattr(site, "default_host_name", None),
            outbound_ip_addresses=split_ip_addresses(getattr(site, "outbound_ip_addresses", None)),
        )
