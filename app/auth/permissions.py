"""
Central registry of allowed actions per role.
"""
ROLE_SCOPES = {
    "member": {"manage_catalog", "manage_orders", "view_reports"},
    "admin":  {"*"},
}

ROLES = tuple(ROLE_SCOPES)


def role_has_scope(role: str, action: str) -> bool:
    scopes = ROLE_SCOPES.get(role, set())
    return "*" in scopes or action in scopes
