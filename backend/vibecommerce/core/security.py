from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from vibecommerce.core.config import settings
from vibecommerce.core.exceptions import InvalidToken, TokenExpired

# CryptContext handles password hashing using bcrypt
# bcrypt is slow by design to prevent brute-force attacks
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ROLE_USER = "user"
ROLE_ADMIN = "admin"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    # bcrypt generates a salt per hash, so equal passwords give different hashes
    return pwd_context.hash(password)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as described by a verified token."""
    id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class TokenService:
    """
    Issues and verifies signed, time-limited identity tokens.

    Verification never touches the database: a token is valid exactly when
    its signature checks out and it has not expired. There is no revocation,
    so the role embedded at issuance stays in force until expiry.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 30):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT carrying the user's id, email and role"""
        now = datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)

        # JWT standard uses 'sub' (subject) for the user identifier; it must be a string
        to_encode = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Decode a token, raising TokenExpired or InvalidToken on failure"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpired("Token has expired")
        except JWTError:
            raise InvalidToken("Token is invalid")

        try:
            return Identity(
                id=int(payload["sub"]),
                email=payload["email"],
                role=payload["role"],
            )
        except (KeyError, ValueError, TypeError):
            # Signed by us but missing claims - treat as corrupted
            raise InvalidToken("Token is missing required claims")


token_service = TokenService(
    secret_key=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
)
