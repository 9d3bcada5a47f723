from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Broker envelope --- #


class Message(BaseModel):
    text: Optional[str] = None
    field: Optional[str] = None
    severity: Optional[str] = None
    exit_code: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class RestResponse(BaseModel):
    """
    Every broker response is wrapped as:
      {"type": "application", "status": "ok", "data": {...} | [...], "messages": [...]}
    """

    type: Optional[str] = None
    status: Optional[str] = None
    data: Any = None
    messages: List[Message] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("messages", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return value or []

    def data_object(self) -> Dict[str, Any]:
        return self.data if isinstance(self.data, dict) else {}

    def data_list(self) -> List[Dict[str, Any]]:
        if not isinstance(self.data, list):
            return []
        return [d for d in self.data if isinstance(d, dict)]

    def message_texts(self) -> List[str]:
        return [m.text for m in self.messages if m.text]


class BaseResourceModel(BaseModel):
    """Attributes of a broker resource. Links are parsed separately."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# --- Resource attributes --- #


class UserModel(BaseResourceModel):
    id: Optional[str] = None
    login: str
    consumed_gears: int = 0
    max_gears: Optional[int] = None


class DomainModel(BaseResourceModel):
    # Newer brokers report the namespace as 'name', older ones only as 'id'.
    id: str = Field(alias="name")
    suffix: Optional[str] = None
    creation_time: Optional[datetime] = None


class ApplicationModel(BaseResourceModel):
    name: str
    uuid: Optional[str] = Field(default=None, alias="id")
    framework: Optional[str] = None
    app_url: Optional[str] = None
    git_url: Optional[str] = None
    ssh_url: Optional[str] = None
    initial_git_url: Optional[str] = None
    deployment_type: Optional[str] = None
    gear_profile: Optional[str] = None
    scalable: bool = False
    creation_time: Optional[datetime] = None
    domain_id: Optional[str] = None


class EmbeddedCartridgeModel(BaseResourceModel):
    name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None
    status_messages: Optional[List[Dict[str, Any]]] = None


class EnvironmentVariableModel(BaseResourceModel):
    name: str
    value: Optional[str] = None


class AliasModel(BaseResourceModel):
    id: str
    has_private_ssl_certificate: bool = False
    certificate_added_at: Optional[str] = None


class GearModel(BaseResourceModel):
    id: str
    state: Optional[str] = None
    ssh_url: Optional[str] = None


class GearGroupModel(BaseResourceModel):
    uuid: str = Field(alias="id")
    name: Optional[str] = None
    gear_profile: Optional[str] = None
    gears: List[GearModel] = Field(default_factory=list)
    cartridges: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def cartridge_names(self) -> List[str]:
        return [c["name"] for c in self.cartridges if isinstance(c.get("name"), str)]


__all__ = [
    "Message",
    "RestResponse",
    "BaseResourceModel",
    "UserModel",
    "DomainModel",
    "ApplicationModel",
    "EmbeddedCartridgeModel",
    "EnvironmentVariableModel",
    "AliasModel",
    "GearModel",
    "GearGroupModel",
]
