"""Data types decoded from CDN77 API responses."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

STATUS_OK = "ok"


@dataclass(frozen=True)
class ApiResponse:
    """Status envelope shared by every API answer."""

    status: str
    description: str = ""

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ApiResponse":
        return cls(
            status=str(data.get("status") or ""),
            description=str(data.get("description") or ""),
        )


@dataclass(frozen=True)
class CdnResource:
    """A CDN resource: numeric id plus the hostname it serves."""

    id: int
    cname: str


@dataclass(frozen=True)
class ResourceList(ApiResponse):
    """Answer of the resource-listing endpoint."""

    resources: List[CdnResource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ResourceList":
        """Build a ``ResourceList``.

        Raises
        ------
        ValueError
            If ``cdnResources`` is not a list of objects or an ``id`` is not
            an integer.
        """
        envelope = ApiResponse.from_json(data)
        entries = data.get("cdnResources") or []
        if not isinstance(entries, list):
            raise ValueError("cdnResources is not a list")

        resources = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValueError(f"Invalid resource entry: {entry!r}")
            resource_id = entry.get("id", 0)
            if isinstance(resource_id, bool) or not isinstance(resource_id, int):
                raise ValueError(f"Invalid resource id: {resource_id!r}")
            resources.append(
                CdnResource(id=resource_id, cname=str(entry.get("cname") or ""))
            )
        return cls(
            status=envelope.status,
            description=envelope.description,
            resources=resources,
        )
