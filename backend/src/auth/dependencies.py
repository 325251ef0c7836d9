"""FastAPI dependencies for authentication.

This module provides dependency injection functions for:
- Extracting and validating JWT tokens from requests
- Loading the current authenticated user
- Building the immutable Principal handed to the access policy

Usage:
    @router.get("/products")
    def list_products(principal: Principal = Depends(get_current_principal)):
        ...
"""

import logging
from typing import Annotated, Optional
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from .jwt import decode_token
from .principal import Principal

logger = logging.getLogger(__name__)

# auto_error=False so a missing header answers 401 rather than 403
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Extract and validate JWT token, returning the authenticated user.

    This dependency:
    1. Extracts Bearer token from Authorization header
    2. Validates token signature and expiration
    3. Loads user (with roles) from database
    4. Checks user is ACTIVE (not DISABLED)

    Raises:
        HTTPException 401: If token is missing, invalid, expired, or user not found
        HTTPException 403: If user status is DISABLED
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)

        user_id_str = payload.get("sub")
        if not user_id_str:
            raise _unauthorized("Invalid token: missing user ID claim")

        user_id = UUID(user_id_str)

    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")
    except ValueError as e:
        raise _unauthorized(f"Invalid token claims: {str(e)}")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise _unauthorized("User not found")

    if user.status != "ACTIVE":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    return user


def get_current_principal(current_user: User = Depends(get_current_user)) -> Principal:
    """Resolve the request's Principal from the authenticated user.

    A user without super_admin must belong to an organization. A missing
    organization is a data integrity problem, reported here so that the
    access policy never sees a half-formed principal.

    Raises:
        HTTPException 500: If a non super admin has no organization
    """
    principal = Principal.from_user(current_user)

    if principal.organization_id is None and not principal.is_super_admin:
        logger.error(
            f"User {current_user.id} has no organization association",
            extra={"user_id": current_user.id}
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="User has no organization association",
        )

    return principal


# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
