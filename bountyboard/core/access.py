"""
BountyBoard - Organization allowlist and project visibility checks

The allowlist is built once at startup and passed in explicitly; nothing in
this module reads the environment.
"""
import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

ALLOW_ALL = "all"

VISIBILITY_PUBLIC = "public"
VISIBILITY_ORGANIZATION = "organization"
VISIBILITY_PRIVATE = "private"
VISIBILITIES = (VISIBILITY_PUBLIC, VISIBILITY_ORGANIZATION, VISIBILITY_PRIVATE)


class AllowedOrganizations:
    """Immutable set of organizations permitted to sign in.

    An empty allowlist, or one whose first entry is ``"all"``, permits every
    organization.
    """

    def __init__(self, organizations: Iterable[str] = ()):
        orgs = [o.strip() for o in organizations if o and o.strip()]
        self.allow_all = not orgs or orgs[0] == ALLOW_ALL
        self.organizations = frozenset(orgs)

    @classmethod
    def from_string(cls, value: Optional[str]) -> "AllowedOrganizations":
        return cls(string_to_organizations(value))

    def __contains__(self, organization: str) -> bool:
        return is_organization_allowed(organization, self)

    def __repr__(self) -> str:
        if self.allow_all:
            return "AllowedOrganizations(all)"
        return f"AllowedOrganizations({sorted(self.organizations)})"


def is_organization_allowed(organization: Optional[str], allowlist: AllowedOrganizations) -> bool:
    if allowlist.allow_all:
        return True
    allowed = bool(organization) and organization in allowlist.organizations
    if not allowed:
        logger.info(f"Organization not in allowlist: {organization!r}")
    return allowed


def organizations_to_string(orgs: Optional[Iterable[str]]) -> Optional[str]:
    """Join organizations into the comma-separated storage form; None if empty."""
    cleaned = [o.strip() for o in (orgs or []) if o and o.strip()]
    if not cleaned:
        return None
    return ",".join(cleaned)


def string_to_organizations(value: Optional[str]) -> List[str]:
    if not value or not value.strip():
        return []
    return [o.strip() for o in value.split(",") if o.strip()]


def can_view_project(project, viewer_id: Optional[str], viewer_organization: Optional[str]) -> bool:
    """Visibility rule for a project row.

    public: everyone; organization: the owner plus members of an allowed
    organization; private: the owner only.
    """
    if viewer_id is not None and project.owner_id == viewer_id:
        return True
    visibility = project.visibility or VISIBILITY_PUBLIC
    if visibility == VISIBILITY_PUBLIC:
        return True
    if visibility == VISIBILITY_ORGANIZATION:
        allowed = string_to_organizations(project.allowed_organizations)
        return bool(viewer_organization) and viewer_organization in allowed
    return False
