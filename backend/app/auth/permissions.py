"""Role-based permissions.

Each role maps to a fixed permission set. Route guards resolve the set from
the user's stored role on every request; the copy embedded in the access
token is informational for clients.

Permission naming: `<resource>.<action>`
  Resources: shipment, containers, fleet, inventory, financials, reports
"""

from __future__ import annotations

from app.models.user import UserRole


# ── All known permissions ───────────────────────────────────

ALL_PERMISSIONS: set[str] = {
    # Shipments
    "shipment.create",        # book a shipment for yourself
    "shipment.read",          # view own shipments
    "shipment.manage",        # view all shipments, change status

    # Operations
    "containers.manage",
    "fleet.manage",
    "inventory.manage",

    # Financials (admin only)
    "financials.read",
    "financials.write",

    # Reports & dashboards
    "reports.read",
}


# ── Role → permissions ──────────────────────────────────────

ROLE_DEFAULTS: dict[str, set[str]] = {
    UserRole.ADMIN.value: ALL_PERMISSIONS.copy(),

    UserRole.CUSTOMER.value: {
        "shipment.create",
        "shipment.read",
    },
}


def resolve_permissions(role: str) -> list[str]:
    """Sorted permission list for a role (stable JWT claims)."""
    return sorted(ROLE_DEFAULTS.get(role, set()))


def has_permission(user_permissions: list[str] | set[str], required: str) -> bool:
    return required in user_permissions
