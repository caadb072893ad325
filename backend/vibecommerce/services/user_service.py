import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from vibecommerce.core.exceptions import Conflict, NotFound, Unauthenticated
from vibecommerce.core.security import ROLE_ADMIN, ROLE_USER, get_password_hash, verify_password
from vibecommerce.models.user import User

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password - callers cannot tell which
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

# Verified against when the email is unknown so both failure paths pay for a bcrypt check
_DUMMY_HASH = get_password_hash("not-a-real-password")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Credential store: user records and password checks"""

    @staticmethod
    def create_user(db: Session, email: str, password: str, name: str, role: str = ROLE_USER) -> User:
        """
        Register a user. Raises Conflict if the (normalized) email is taken.
        """
        email = normalize_email(email)

        # Explicit check gives a clearer error than the unique constraint
        if db.query(User).filter(User.email == email).first():
            raise Conflict("Email already registered")

        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            name=name,
            role=role,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Two registrations for the same email raced past the check above
            db.rollback()
            raise Conflict("Email already registered")
        db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.role})")
        return user

    @staticmethod
    def verify_credentials(db: Session, email: str, password: str) -> User:
        """Return the user for a correct email/password pair or raise Unauthenticated"""
        user = db.query(User).filter(User.email == normalize_email(email)).first()

        if user is None:
            verify_password(password, _DUMMY_HASH)
            logger.info("Failed login attempt")
            raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)

        if not verify_password(password, user.hashed_password):
            logger.info(f"Failed login attempt for user {user.id}")
            raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)

        return user

    @staticmethod
    def find_by_id(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFound("User not found")
        return user

    @staticmethod
    def ensure_admin(db: Session, email: str, password: str, name: str) -> User:
        """Create the configured admin account unless a user with that email exists"""
        existing = db.query(User).filter(User.email == normalize_email(email)).first()
        if existing:
            return existing
        return UserService.create_user(db, email, password, name, role=ROLE_ADMIN)


user_service = UserService()
