"""Resolve which tenant/user a cart request acts for.

Query parameters win over the ``X-Tenant-Id`` / ``X-User-Id`` headers.
"""

from dataclasses import dataclass

from fastapi import Header, Query
from protean.exceptions import ValidationError

from carts.utils.logging import add_context


@dataclass(frozen=True)
class CartOwner:
    tenant_id: str
    user_id: str


async def resolve_owner(
    tenant_id: str | None = Query(None, alias="tenantId"),
    user_id: str | None = Query(None, alias="userId"),
    x_tenant_id: str | None = Header(None),
    x_user_id: str | None = Header(None),
) -> CartOwner:
    tenant = (tenant_id or x_tenant_id or "").strip()
    user = (user_id or x_user_id or "").strip()

    errors = {}
    if not tenant:
        errors["tenantId"] = ["tenantId is required"]
    if not user:
        errors["userId"] = ["userId is required"]
    if errors:
        raise ValidationError(errors)

    add_context(tenant_id=tenant, user_id=user)
    return CartOwner(tenant_id=tenant, user_id=user)
