"""Sign-up, sign-in and credential recovery endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.core.config import Settings
from palmpay.core.security import create_access_token
from palmpay.interfaces.http.deps import (
    AuthenticatedAccount,
    get_account_service,
    get_app_settings,
    get_current_session,
    get_db_session,
)
from palmpay.modules.accounts import (
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountService,
    AccountValidationError,
    InvalidAccountTokenError,
)
from palmpay.schemas import (
    AccountResponse,
    EmailVerifyRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PasswordForgotRequest,
    PasswordForgotResponse,
    PasswordResetRequest,
    RegisterRequest,
    RegisterResponse,
)

router = APIRouter()


def _ws_url(request: Request, settings: Settings, token: str) -> str:
    host_header = request.headers.get("host", f"localhost:{settings.port}")
    scheme = "ws"
    if request.headers.get("x-forwarded-proto") == "https":
        scheme = "wss"
    return f"{scheme}://{host_header}/ws?token={token}"


def _expose_tokens(settings: Settings) -> bool:
    # Without a mail integration the one-time tokens go back in the response
    # outside production.
    return settings.environment != "production"


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def register(
    payload: RegisterRequest,
    request: Request,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> RegisterResponse:
    try:
        registration = await account_service.register(
            AccountCreateInput(
                email=payload.email,
                password=payload.password,
                full_name=payload.full_name,
                father_name=payload.father_name,
                cnic=payload.cnic,
                currency=settings.transfers.currency,
            )
        )
    except AccountValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AccountAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    await db.commit()

    account = registration.account
    access_token = create_access_token(settings.security, account.id, account.email)
    return RegisterResponse(
        access_token=access_token,
        ws_url=_ws_url(request, settings, access_token),
        account=AccountResponse.model_validate(account),
        password_strength=registration.password_strength,
        verification_token=registration.verification_token if _expose_tokens(settings) else None,
    )


@router.post("/login", response_model=LoginResponse, summary="Sign in with e-mail and password")
async def login(
    payload: LoginRequest,
    request: Request,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    account = await account_service.authenticate(payload.email, payload.password)
    if not account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    await account_service.set_last_login(account.id)
    await db.commit()

    access_token = create_access_token(settings.security, account.id, account.email)
    return LoginResponse(
        access_token=access_token,
        ws_url=_ws_url(request, settings, access_token),
        account=AccountResponse.model_validate(account),
    )


@router.post("/logout", response_model=MessageResponse, summary="End the current session")
async def logout(
    session: AuthenticatedAccount = Depends(get_current_session),
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await account_service.sign_out(session.token)
    await db.commit()
    return MessageResponse(detail="Signed out")


@router.post("/password/forgot", response_model=PasswordForgotResponse, summary="Request a password reset")
async def forgot_password(
    payload: PasswordForgotRequest,
    account_service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_app_settings),
) -> PasswordForgotResponse:
    token = await account_service.issue_password_reset(payload.email)
    # Same answer for known and unknown addresses.
    return PasswordForgotResponse(
        detail="If the address is registered, password reset instructions have been sent",
        reset_token=token if _expose_tokens(settings) else None,
    )


@router.post("/password/reset", response_model=MessageResponse, summary="Set a new password with a reset token")
async def reset_password(
    payload: PasswordResetRequest,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    try:
        await account_service.reset_password(payload.token, payload.new_password)
    except (InvalidAccountTokenError, AccountValidationError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await db.commit()
    return MessageResponse(detail="Password has been reset")


@router.post("/email/verify", response_model=AccountResponse, summary="Confirm an e-mail address")
async def verify_email(
    payload: EmailVerifyRequest,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountResponse:
    try:
        account = await account_service.verify_email(payload.token)
    except InvalidAccountTokenError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await db.commit()
    return AccountResponse.model_validate(account)
