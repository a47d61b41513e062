"""JWT Token Issuer — TokenIssuer implementation backed by python-jose.

Invariants:
    - Tokens carry only `sub` (user id), `iat` and `exp`; no profile data
    - decode() maps every jose failure to AuthenticationError (401)
    - Expired and malformed tokens get distinct messages; neither leaks the secret

Design Decisions:
    - HS256 shared secret from settings: single service, no key distribution needed
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from sefask.core.domain_types import UserId
from sefask.core.errors import AuthenticationError


class JWTTokenIssuer:
    """Issues and decodes signed session tokens."""

    def __init__(
        self, secret: str, algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=3),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: UserId) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_in).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> UserId:
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise AuthenticationError("Token expired.")
        except JWTError:
            raise AuthenticationError("Invalid token.")
        try:
            return UserId(UUID(claims["sub"]))
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token.")
