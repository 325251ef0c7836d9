"""Authentication endpoints for the catalog admin API

Provides endpoints for user login and retrieving current user information.
"""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from audit.service import log_from_request
from .schemas import LoginRequest, LoginResponse, MeResponse, UserResponse
from .password import verify_password
from .jwt import create_access_token, _get_jwt_expiry_minutes
from .dependencies import CurrentUser
from .rate_limit import check_rate_limit, rate_limiter


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    _: None = Depends(check_rate_limit)
):
    """Authenticate user and return JWT access token.

    Security measures:
    - Rate limiting and lockout (see auth.rate_limit)
    - One generic 401 message for unknown email, wrong password and
      disabled account
    - Failed and successful logins are written to audit_log
    - last_login_at is updated on successful login

    Raises:
        HTTPException: 401 if credentials are invalid or account is disabled
        HTTPException: 429 if rate limit exceeded or account locked out
    """
    email = credentials.email.lower()
    user = db.query(User).filter(User.email == email).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        log_from_request(
            db=db,
            request=request,
            organization_id=user.organization_id if user else None,
            action="LOGIN_FAILED",
            actor_id=user.id if user else None,
            metadata={"email": email, "reason": "invalid_credentials"},
        )
        db.commit()
        rate_limiter.record_failed_login(email, request)

        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if user.status == 'DISABLED':
        log_from_request(
            db=db,
            request=request,
            organization_id=user.organization_id,
            action="LOGIN_FAILED",
            actor_id=user.id,
            metadata={"email": email, "reason": "account_disabled"},
        )
        db.commit()
        rate_limiter.record_failed_login(email, request)

        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    user.last_login_at = datetime.now(timezone.utc)
    rate_limiter.clear_failed_attempts(email)

    log_from_request(
        db=db,
        request=request,
        organization_id=user.organization_id,
        action="LOGIN_SUCCESS",
        actor_id=user.id,
        metadata={"email": email},
    )
    db.commit()
    db.refresh(user)

    access_token = create_access_token(
        user_id=user.id,
        organization_id=user.organization_id,
        roles=user.role_names,
        email=user.email
    )

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=_get_jwt_expiry_minutes() * 60
    )


@router.get("/me", response_model=MeResponse)
async def get_me(current_user: CurrentUser):
    """Return the profile and roles of the authenticated user."""
    return MeResponse(user=UserResponse.model_validate(current_user))
