"""Auth API — signup, login, current user.

Learn: Routes for the account lifecycle:
- POST /auth/signup → create an account → token
- POST /auth/login → email/password → token
- GET /auth/me → the authenticated account

Login failures use one message for unknown email and wrong password, so
the endpoint can't be used to discover which addresses have accounts.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_token_service,
    not_authenticated,
)
from tasklist.auth.jwt import TokenService
from tasklist.db.engine import get_db
from tasklist.errors import EmailTakenError, InvalidCredentialsError
from tasklist.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserRead
from tasklist.services.account_service import AccountService
from tasklist.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def _auth_svc(
    request: Request,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(db, tokens, bcrypt_rounds=request.app.state.settings.bcrypt_rounds)


# ─── Signup ─────────────────────────────────────────────


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(body: SignupRequest, svc: AuthService = Depends(_auth_svc)):
    """Create a new account and return a token for it."""
    try:
        user, token = await svc.signup(body.email, body.password)
    except EmailTakenError:
        raise HTTPException(status_code=409, detail="Email already in use")
    return AuthResponse(token=token, user=UserRead.model_validate(user))


# ─── Login ──────────────────────────────────────────────


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: AuthService = Depends(_auth_svc)):
    """Login with email and password → token."""
    try:
        user, token = await svc.login(body.email, body.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=401,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthResponse(token=token, user=UserRead.model_validate(user))


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserRead)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the current authenticated user's account."""
    user = await AccountService(db).get(identity.user_id)
    if not user:
        # Valid token for an account that no longer exists
        raise not_authenticated()
    return user
