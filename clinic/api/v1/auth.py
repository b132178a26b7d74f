"""Login endpoint."""

from fastapi import APIRouter, HTTPException, Request, status

from clinic.api.deps import DbSession, get_client_ip
from clinic.core.config import settings
from clinic.core.logging import audit_logger
from clinic.schemas.auth import LoginRequest, TokenResponse
from clinic.services.auth import AuthService

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Login",
    description="Authenticate with email and password and receive a bearer token",
)
async def login(
    request: Request,
    credentials: LoginRequest,
    session: DbSession,
) -> TokenResponse:
    """Authenticate a user and return a JWT token.

    Args:
        request: FastAPI request
        credentials: Email and password
        session: Database session

    Returns:
        JWT access token

    Raises:
        HTTPException: If credentials are invalid or the account is disabled
    """
    auth_service = AuthService(session)
    user = await auth_service.authenticate(
        email=credentials.email,
        password=credentials.password,
    )

    if not user:
        audit_logger.log(
            "login_failed",
            None,
            "user",
            None,
            metadata={
                "email": credentials.email,
                "reason": "invalid_credentials",
                "ip_address": get_client_ip(request),
            },
        )

        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    access_token = auth_service.create_token(user)

    audit_logger.log(
        "login_success",
        user.id,
        "user",
        user.id,
        metadata={"ip_address": get_client_ip(request)},
    )

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
    )
