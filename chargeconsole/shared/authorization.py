"""Role checks for the logged-in user."""

from chargeconsole.shared.models import UserRole, UserToken

ELEVATED_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})


class AuthorizationService:
    def has_elevated_privilege(self, actor: UserToken) -> bool:
        return actor.role in ELEVATED_ROLES
