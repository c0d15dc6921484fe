"""Authentication API endpoints.

    POST /api/auth/register             create account, sends verification email
    POST /api/auth/login                authenticate, receive JWT (also set as cookie)
    POST /api/auth/logout               clear the auth cookie
    GET  /api/auth/me                   current user
    POST /api/auth/verify-email         confirm email with the emailed token
    POST /api/auth/resend-verification  send a fresh verification email
"""

import logging

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..core.config import settings
from ..core.token_factory import create_token
from ..database import get_db
from ..exceptions import AuthenticationError
from ..repositories import UserRepository
from ..schemas.user import UserResponse
from ..services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


# --- Request/Response schemas ---


class RegisterRequest(BaseModel):
    email: str = Field(..., description="Email address")
    password: str = Field(..., min_length=8, max_length=128, description="Password (8-128 characters)")

    model_config = {
        "json_schema_extra": {
            "examples": [{"email": "alice@example.com", "password": "securepass"}]
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


# --- Endpoints ---


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=201,
    summary="Register a new user",
)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register_user(db, body.email, body.password)
    return UserResponse.from_user(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate and receive JWT",
)
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, body.email, body.password)
    token = create_token(
        user_id=user.id,
        email=user.email,
        roles=user.role_codes,
        secret=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_hours=settings.jwt_expire_hours,
    )
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.jwt_expire_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.environment.value == "production",
    )
    logger.info("User %s logged in", user.id, extra={"user_id": user.id})
    return LoginResponse(token=token, user=UserResponse.from_user(user))


@router.post("/logout", response_model=MessageResponse, summary="Clear the auth cookie")
def logout(response: Response):
    response.delete_cookie(key=settings.auth_cookie_name)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse, summary="Get current user")
def get_me(auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    user = UserRepository(db).get_by_id_optional(auth.user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return UserResponse.from_user(user)


@router.post("/verify-email", response_model=MessageResponse, summary="Verify email address")
def verify_email(body: VerifyEmailRequest, db: Session = Depends(get_db)):
    auth_service.verify_email(db, body.token)
    return MessageResponse(message="Email verified successfully")


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    summary="Resend the verification email",
)
def resend_verification(auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    auth_service.resend_verification(db, auth.user_id)
    return MessageResponse(message="Verification email sent")
