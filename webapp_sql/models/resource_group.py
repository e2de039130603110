from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ResourceGroupItem(BaseModel):
    name: str = Field(..., description="Resource group name")
    location: str
    id: Optional[str] = None
    provisioning_state: Optional[str] = None

    @staticmethod
    def from_azure(group: Any) -> "ResourceGroupItem":
        properties = getattr(group, "properties", None)
        return ResourceGroupItem(
            name=str(group.name),
            location=str(group.location),
            id=getattr(group, "id", None),
            provisioning_state=getattr(properties, "provisioning_state", None),
        )
