from studysphere.core.core import Service
from studysphere.core.modules.session.models import SessionClaims
from studysphere.core.modules.user.models import User


class AccessService(Service):
    """Single access-control boundary: a valid session makes its user the owner of every query."""

    async def ensure_authenticated(self, token: str | None) -> SessionClaims:
        """Ensure the request carries a valid session; raises AuthenticationError otherwise."""
        return await self.core.services.session.get_authenticated_claims(token)

    async def ensure_user(self, token: str | None) -> User:
        """Ensure authentication and load the full user record."""
        claims = await self.ensure_authenticated(token)
        return await self.core.services.user.get_user(claims.user_id)
