from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from pydantic import BaseModel

from schemas.credentials_schema import LoginCredentials
from schemas.invoice_match_schema import InvoiceMatchCriteria
from schemas.receiving_schema import ReceivingRecord
from schemas.user_profile_schema import UserProfile
from schemas.vendor_schema import Vendor
from schemas.warehouse_schema import Warehouse


class UnknownEntityKindError(LookupError):
    pass


class EntityKind(str, Enum):
    VENDOR = "Vendor"
    RECEIVING_RECORD = "ReceivingRecord"
    INVOICE_MATCH_CRITERIA = "InvoiceMatchCriteria"
    LOGIN_CREDENTIALS = "LoginCredentials"
    WAREHOUSE = "Warehouse"
    USER_PROFILE = "UserProfile"


class SchemaRegistry:
    """Read-only mapping of entity kind name to its schema class.

    Instances are built once and never mutated, so a single registry can be
    shared by every request handler and thread.
    """

    def __init__(self, schemas: Mapping[str, type[BaseModel]]) -> None:
        self._schemas: Mapping[str, type[BaseModel]] = MappingProxyType(
            {_kind_name(kind): schema for kind, schema in schemas.items()}
        )

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and _kind_name(kind) in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def kinds(self) -> tuple[str, ...]:
        return tuple(self._schemas)

    def resolve(self, kind: str | EntityKind) -> str:
        name = _kind_name(kind)
        if name not in self._schemas:
            known = ", ".join(self._schemas)
            raise UnknownEntityKindError(f"Unknown entity kind: {name!r} (known: {known})")
        return name

    def schema_for(self, kind: str | EntityKind) -> type[BaseModel]:
        return self._schemas[self.resolve(kind)]

    def json_schema(self, kind: str | EntityKind) -> dict[str, Any]:
        return self.schema_for(kind).model_json_schema(by_alias=True)


def _kind_name(kind: str | EntityKind) -> str:
    if isinstance(kind, EntityKind):
        return kind.value
    return str(kind)


DEFAULT_REGISTRY = SchemaRegistry(
    {
        EntityKind.VENDOR: Vendor,
        EntityKind.RECEIVING_RECORD: ReceivingRecord,
        EntityKind.INVOICE_MATCH_CRITERIA: InvoiceMatchCriteria,
        EntityKind.LOGIN_CREDENTIALS: LoginCredentials,
        EntityKind.WAREHOUSE: Warehouse,
        EntityKind.USER_PROFILE: UserProfile,
    }
)
