"""
Auth Router

Screens of the signed-out side of the client:
- login + OTP verification + resend
- logout
- registration
- forgot / reset password
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional
from pydantic import BaseModel

from ...core.backend_routes import BackendRoutes
from ...core.domain.session import SessionState
from ...core.domain.user import UserRegistration
from ...core.services.session_service import SessionService
from ...core.services.recovery_service import PasswordRecoveryService, token_from_url
from ...core.services.account_service import AccountService, ACCOUNT_CREATED
from ..dependencies import (
    get_session_service,
    get_recovery_service,
    get_account_service,
)

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# ========== Schemas ==========
class LoginRequest(BaseModel):
    """Schema for the sign-in form"""
    userName: str
    password: str


class OtpRequest(BaseModel):
    otp: str


class RegisterRequest(BaseModel):
    """Schema for the create-account form"""
    name: str
    userName: str
    email: str
    password: str
    confirmPassword: str


class ForgotPasswordRequest(BaseModel):
    input: str


class ResetPasswordRequest(BaseModel):
    """Schema for the new-password form; `link` is the emailed reset URL"""
    newPassword: str
    confirmPassword: str
    link: Optional[str] = None


class SessionResponse(BaseModel):
    """Where the UI should be, derived from the session state"""
    state: str
    username: Optional[str] = None
    authenticated: bool
    loading: bool = False
    next: str
    message: Optional[str] = None

    @staticmethod
    def from_service(service: SessionService, message: Optional[str] = None) -> "SessionResponse":
        snapshot = service.snapshot()
        if service.state == SessionState.AUTHENTICATED:
            next_screen = "/dashboard"
        elif service.state == SessionState.PENDING_VERIFICATION:
            next_screen = "/verify"
        else:
            next_screen = BackendRoutes.LOGIN_ENTRY_POINT
        return SessionResponse(next=next_screen, message=message, **snapshot)


class MessageResponse(BaseModel):
    ok: bool = True
    message: str
    redirect: Optional[str] = None


# ========== Session ==========
@router.get("/session", response_model=SessionResponse)
async def get_session(service: SessionService = Depends(get_session_service)):
    """Current session state (used by the UI to pick a screen)"""
    return SessionResponse.from_service(service)


@router.post("/login", response_model=SessionResponse)
async def login(
    data: LoginRequest,
    service: SessionService = Depends(get_session_service)
):
    """
    Sign in

    Unverified accounts land in PENDING_VERIFICATION and get an OTP email.
    """
    state = await service.login(data.userName, data.password)
    message = None
    if state == SessionState.PENDING_VERIFICATION:
        message = "We've sent an OTP to your email address"
    return SessionResponse.from_service(service, message)


@router.post("/verify-otp", response_model=SessionResponse)
async def verify_otp(
    data: OtpRequest,
    service: SessionService = Depends(get_session_service)
):
    await service.verify_otp(data.otp)
    return SessionResponse.from_service(service)


@router.post("/resend-otp", response_model=SessionResponse)
async def resend_otp(service: SessionService = Depends(get_session_service)):
    await service.resend_otp()
    return SessionResponse.from_service(service, "A new code has been sent to your email")


@router.post("/logout", response_model=SessionResponse)
async def logout(service: SessionService = Depends(get_session_service)):
    service.logout()
    return SessionResponse.from_service(service)


# ========== Registration ==========
@router.post("/register", response_model=MessageResponse)
async def register(
    data: RegisterRequest,
    service: AccountService = Depends(get_account_service)
):
    await service.register(UserRegistration(
        name=data.name,
        user_name=data.userName,
        email=data.email,
        password=data.password,
        confirm_password=data.confirmPassword
    ))
    return MessageResponse(message=ACCOUNT_CREATED, redirect=BackendRoutes.LOGIN_ENTRY_POINT)


# ========== Password recovery ==========
@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    data: ForgotPasswordRequest,
    service: PasswordRecoveryService = Depends(get_recovery_service)
):
    result = await service.request_reset(data.input)
    return MessageResponse(message=result.message, redirect=result.redirect_to)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    data: ResetPasswordRequest,
    token: Optional[str] = Query(None),
    service: PasswordRecoveryService = Depends(get_recovery_service)
):
    """
    Consume a reset link

    `token` comes from the query string, or from the pasted `link`.
    """
    token = token or token_from_url(data.link)
    result = await service.consume_reset(token, data.newPassword, data.confirmPassword)
    return MessageResponse(message=result.message, redirect=result.redirect_to)
