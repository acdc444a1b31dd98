import structlog

from studysphere.core.core import Service
from studysphere.core.modules.session.models import SessionClaims, SessionToken
from studysphere.core.modules.session.tokens import issue_token, verify_token
from studysphere.core.modules.user.models import User
from studysphere.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues and checks stateless session tokens.

    Nothing is stored per session. Revocation works through the user's
    `token_version`: tokens carrying an older version are refused.
    """

    def issue_session(self, user: User) -> SessionToken:
        config = self.core.config
        token = issue_token(
            user.id,
            user.email,
            config.session_secret_key,
            version=user.token_version,
            max_age=config.session_max_age,
        )
        logger.debug("session_issued", user_id=user.id)
        return token

    def verify_session(self, token: str | None) -> SessionClaims | None:
        """Check signature and expiry only."""
        return verify_token(token, self.core.config.session_secret_key)

    async def get_authenticated_claims(self, token: str | None) -> SessionClaims:
        """Resolve a token to claims of an existing user, or raise AuthenticationError."""
        claims = self.verify_session(token)
        if claims is None:
            raise AuthenticationError

        user = await self.core.services.user.find_user(claims.user_id)
        if user is None or user.token_version != claims.version:
            logger.debug("session_revoked", user_id=claims.user_id)
            raise AuthenticationError
        return claims
