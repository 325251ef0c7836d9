"""User roles for the catalog admin.

Roles are independent labels, not a hierarchy: a user may hold both, and
each check below is evaluated on its own.

Capability Matrix (Product records):
┌──────────────────────┬─────────────┬────────────────────┬──────────┐
│ Action               │ super_admin │ organization_admin │ no role  │
├──────────────────────┼─────────────┼────────────────────┼──────────┤
│ View / Edit / Delete │ any org     │ own org only       │ denied   │
│ List                 │ all orgs    │ own org only       │ all orgs │
│ Pick organization    │ ✓           │ fixed to own       │ fixed    │
└──────────────────────┴─────────────┴────────────────────┴──────────┘

The unscoped list for users without a role is inherited behaviour; see
STRICT_LIST_SCOPING in config.
"""

from enum import Enum
from typing import FrozenSet, Iterable


class UserRole(str, Enum):
    """Role labels that carry capabilities.

    Values are stored as TEXT in role.name and must match exactly.
    """
    SUPER_ADMIN = "super_admin"
    ORGANIZATION_ADMIN = "organization_admin"


def parse_roles(names: Iterable[str]) -> FrozenSet[UserRole]:
    """Convert stored role labels to the set of known roles.

    Unknown labels are dropped: they grant nothing.

    Examples:
        >>> sorted(parse_roles(["organization_admin", "editor"]))
        [<UserRole.ORGANIZATION_ADMIN: 'organization_admin'>]
        >>> parse_roles([])
        frozenset()
    """
    known = {role.value: role for role in UserRole}
    return frozenset(known[name] for name in names if name in known)
