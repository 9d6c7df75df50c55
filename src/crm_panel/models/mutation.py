"""Mutation request/response models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from crm_panel.exceptions import ValidationError
from crm_panel.models.common import ResourceKind


class MutationOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def http_method(self) -> str:
        return {"create": "POST", "update": "PUT", "delete": "DELETE"}[self.value]


@dataclass(frozen=True, slots=True)
class MutationRequest:
    """
    A create/update/delete against one resource family.

    Attributes:
        resource: Resource family; also the invalidation scope on success.
        operation: What to do.
        payload: JSON body sent to the backend.
        record_id: Target record for update and delete.
    """

    resource: ResourceKind
    operation: MutationOperation
    payload: Mapping[str, Any] = field(default_factory=dict)
    record_id: int | str | None = None

    def path(self) -> str:
        """Return the endpoint path relative to the API root."""
        if self.operation is MutationOperation.CREATE:
            return self.resource.value
        if self.record_id is None:
            raise ValidationError(f"{self.operation.value} requires a record id")
        return f"{self.resource.value}/{self.record_id}"


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Backend envelope ``{success, data?, error?}``."""

    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def from_response(cls, payload: Any) -> "MutationResult":
        if not isinstance(payload, Mapping):
            return cls(success=True, data=payload)
        return cls(
            success=bool(payload.get("success", True)),
            data=payload.get("data"),
            error=payload.get("error"),
        )
