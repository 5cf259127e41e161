# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
User endpoints – register and login.

Both return a signed access token on success.  Validation failures are
rendered as 400 by the handler registered in ``main.py``; usecase failures
carry their own status via ``core.errors``.
"""

from fastapi import APIRouter, Depends, Request, status

from users.schemas import LoginRequest, RegisterRequest, TokenResponse
from users.usecase import UserUsecase

router = APIRouter(prefix="/api/v1", tags=["users"])


def get_user_usecase(request: Request) -> UserUsecase:
    return request.app.state.user_usecase


# ---------------------------------------------------------------------------
# POST /api/v1/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=TokenResponse)
def register(body: RegisterRequest, usecase: UserUsecase = Depends(get_user_usecase)):
    """Create an ADMIN or READER account and return its access token."""
    token = usecase.register(body)
    return TokenResponse(
        access_token=token,
        message="successfully registered a new user",
        code=status.HTTP_200_OK,
    )


# ---------------------------------------------------------------------------
# POST /api/v1/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, usecase: UserUsecase = Depends(get_user_usecase)):
    """Authenticate and return a signed JWT."""
    token = usecase.login(body)
    return TokenResponse(
        access_token=token,
        message="successfully logged in",
        code=status.HTTP_200_OK,
    )
