"""Seed system permissions and the student/admin role assignments.

Revision ID: 002
Revises: 001
Create Date: 2026-09-28

"""

from collections.abc import Sequence

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_OWN_USER = '[{"field": "resource.id", "operator": "eq", "value": "currentUser.id"}]'
_OWN_SELECTION = '[{"field": "resource.user_id", "operator": "eq", "value": "currentUser.id"}]'

# name, description, resource, action, conditions
PERMISSIONS = [
    ("user.create", "Create users", "user", "create", None),
    ("user.read", "View user profiles", "user", "read", None),
    ("user.read.own", "View own profile", "user", "read", _OWN_USER),
    ("user.update", "Update user profiles", "user", "update", None),
    ("user.update.own", "Update own profile", "user", "update", _OWN_USER),
    ("user.delete", "Delete users", "user", "delete", None),
    ("user.list", "List users", "user", "list", None),
    ("user.manage", "Manage user accounts", "user", "manage", None),
    ("course.create", "Create courses", "course", "create", None),
    ("course.read", "View courses", "course", "read", None),
    ("course.update", "Update courses", "course", "update", None),
    ("course.delete", "Delete courses", "course", "delete", None),
    ("course.list", "List courses", "course", "list", None),
    ("course.manage", "Manage courses", "course", "manage", None),
    ("selection.create", "Create course selections", "selection", "create", None),
    ("selection.read", "View course selections", "selection", "read", None),
    ("selection.read.own", "View own selections", "selection", "read", _OWN_SELECTION),
    ("selection.update", "Update course selections", "selection", "update", None),
    ("selection.update.own", "Update own selections", "selection", "update", _OWN_SELECTION),
    ("selection.delete", "Delete course selections", "selection", "delete", None),
    ("selection.delete.own", "Delete own selections", "selection", "delete", _OWN_SELECTION),
    ("selection.list", "List course selections", "selection", "list", None),
    ("selection.manage", "Manage course selections", "selection", "manage", None),
    ("permission.read", "View permissions", "permission", "read", None),
    ("permission.list", "List permissions", "permission", "list", None),
    ("permission.assign", "Assign permissions", "permission", "assign", None),
    ("permission.revoke", "Revoke permissions", "permission", "revoke", None),
    ("role.read", "View roles", "role", "read", None),
    ("role.list", "List roles", "role", "list", None),
    ("role.manage", "Manage roles", "role", "manage", None),
    ("system.read", "View system information", "system", "read", None),
    ("system.manage", "Manage the system", "system", "manage", None),
]

ROLE_ASSIGNMENTS = {
    "student": [
        "course.read", "course.list",
        "selection.create", "selection.read.own", "selection.update.own", "selection.delete.own",
        "user.read.own", "user.update.own",
    ],
    "admin": [
        "user.create", "user.read", "user.update", "user.delete", "user.list", "user.manage",
        "course.create", "course.read", "course.update", "course.delete", "course.list",
        "course.manage",
        "selection.read", "selection.list", "selection.manage",
        "permission.read", "permission.list", "permission.assign", "permission.revoke",
        "role.read", "role.list", "role.manage",
        "system.read", "system.manage",
    ],
}


def _quote(value: str | None) -> str:
    if value is None:
        return "NULL"
    return "'" + value.replace("'", "''") + "'"


def upgrade() -> None:
    rows = ",\n".join(
        f"(gen_random_uuid(), {_quote(name)}, {_quote(desc)}, {_quote(resource)}, "
        f"{_quote(action)}, {_quote(conditions)}::jsonb, now(), now())"
        for name, desc, resource, action, conditions in PERMISSIONS
    )
    op.execute(f"""
        INSERT INTO permissions
        (id, name, description, resource, action, conditions, created_at, updated_at)
        VALUES {rows}
    """)
    for role, names in ROLE_ASSIGNMENTS.items():
        name_list = ", ".join(_quote(n) for n in names)
        op.execute(f"""
            INSERT INTO role_permissions (id, role, permission_id, granted_at)
            SELECT gen_random_uuid(), {_quote(role)}, id, now()
            FROM permissions WHERE name IN ({name_list})
        """)


def downgrade() -> None:
    op.execute("DELETE FROM role_permissions")
    op.execute("DELETE FROM permissions")
