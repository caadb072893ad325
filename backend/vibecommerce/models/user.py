from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from vibecommerce.core.database import Base


class User(Base):
    """
    User model representing shoppers and administrators.

    Stores authentication credentials and profile information.
    Passwords are stored as hashes (never plaintext) and never leave the
    credential store - response schemas do not expose hashed_password.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Email is stored lower-cased, unique and indexed for fast lookups during login
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    # "user" or "admin" - only changed by direct database edits
    role = Column(String, nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
