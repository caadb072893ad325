from datetime import datetime
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from pydantic import ConfigDict, EmailStr, Field
from vibecommerce.api.schemas import CamelModel
from vibecommerce.core.database import get_db
from vibecommerce.core.security import Identity, token_service
from vibecommerce.services.user_service import user_service
from vibecommerce.api.dependencies import get_current_identity

router = APIRouter(prefix="/auth", tags=["auth"])


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)


class LoginRequest(CamelModel):
    # Plain str: a malformed email is just another failed login (401), not a 400
    email: str
    password: str


class UserResponse(CamelModel):
    id: int
    email: str
    name: str
    role: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and log them in"""
    user = user_service.create_user(db, user_data.email, user_data.password, user_data.name)
    return {"access_token": token_service.issue(user), "user": user}


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Login and get access token"""
    user = user_service.verify_credentials(db, credentials.email, credentials.password)
    return {"access_token": token_service.issue(user), "user": user}


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get current user information"""
    # 404 if the account was removed after the token was issued
    return user_service.find_by_id(db, identity.id)
