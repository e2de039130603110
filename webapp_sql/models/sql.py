from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class SqlServerItem(BaseModel):
    name: str = Field(..., description="Logical SQL server name")
    location: str
    fully_qualified_domain_name: Optional[str] = None
    administrator_login: Optional[str] = None
    id: Optional[str] = None
    state: Optional[str] = None

    @staticmethod
    def from_azure(server: Any) -> "SqlServerItem":
        return SqlServerItem(
            name=str(server.name),
            location=str(server.location),
            fully_qualified_domain_name=getattr(server, "fully_qualified_domain_name", None),
            administrator_login=getattr(server, "administrator_login", None),
            id=getattr(server, "id", None),
            state=getattr(server, "state", None),
        )


class SqlDatabaseItem(BaseModel):
    name: str = Field(..., description="Database name")
    server_name: str
    id: Optional[str] = None
    status: Optional[str] = None

    @staticmethod
    def from_azure(database: Any, *, server_name: str) -> "SqlDatabaseItem":
        status = getattr(database, "status", None)
        return SqlDatabaseItem(
            name=str(database.name),
            server_name=server_name,
            id=getattr(database, "id", None),
            status=str(getattr(status, "value", status)) if status is not None else None,
        )


class FirewallRuleItem(BaseModel):
    name: str = Field(..., description="Firewall rule name")
    start_ip_address: str
    end_ip_address: str
    id: Optional[str] = None

    @staticmethod
    def from_azure(rule: Any) -> "FirewallRuleItem":
        return FirewallRuleItem(
            name=str(rule.name),
            start_ip_address=str(rule.start_ip_address),
            end_ip_address=str(rule.end_ip_address),
            id=getattr(rule, "id", None),
        )
