"""Server-side session token deny-list backed by Redis"""

from datetime import datetime, timezone
from typing import Optional

import redis

from ..config import settings
from ..utils.logging import get_logger

logger = get_logger(__name__)


class TokenRevocationList:
    """
    Deny-list of session token ids (``jti``)

    Entries are written on logout and expire with the token's natural
    lifetime, so the set never outgrows the number of live sessions.
    Only consulted when TOKEN_REVOCATION_ENABLED is set.
    """

    KEY_PREFIX = "revoked:jti:"

    def __init__(self, redis_client: Optional[redis.Redis] = None):
        self.redis_client = redis_client or redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD,
            decode_responses=True
        )

    def revoke(self, jti: str, expires_at: datetime) -> bool:
        """
        Deny a token until its expiry

        Args:
            jti: Token id
            expires_at: Token expiry; the entry lives exactly that long

        Returns:
            True if stored, False otherwise
        """

        ttl = int((expires_at - datetime.now(timezone.utc)).total_seconds())
        if ttl <= 0:
            # Already expired, signature check rejects it anyway
            return True

        try:
            self.redis_client.setex(self._key(jti), ttl, "1")
            return True

        except redis.RedisError as e:
            logger.error("Failed to revoke token", jti=jti, error=str(e))
            return False

    def is_revoked(self, jti: str) -> bool:
        """
        Check whether a token id is on the deny-list

        A Redis outage is logged and treated as "not revoked".
        """

        try:
            return bool(self.redis_client.exists(self._key(jti)))

        except redis.RedisError as e:
            logger.error("Failed to check token revocation", jti=jti, error=str(e))
            return False

    def _key(self, jti: str) -> str:
        return f"{self.KEY_PREFIX}{jti}"

    def health_check(self) -> bool:
        """
        Check if Redis connection is healthy

        Returns:
            True if healthy, False otherwise
        """

        try:
            return bool(self.redis_client.ping())
        except redis.RedisError:
            return False
