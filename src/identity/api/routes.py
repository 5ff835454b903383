"""FastAPI routes for the Identity domain — accounts and sessions."""

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from identity.api.dependencies import SESSION_COOKIE
from identity.api.schemas import (
    LoggedInUserResponse,
    LoginRequest,
    LoginResponse,
    RegisterUserRequest,
    RegisterUserResponse,
    UserResponse,
)
from identity.session.authentication import LogIn, log_in, log_out
from identity.user.profile import get_user
from identity.user.registration import RegisterUser, register_user
from shared.config import get_settings
from shared.database import get_session
from shared.exceptions import ValidationError
from shared.schemas import MessageResponse

router = APIRouter(prefix="/api/v1/user", tags=["users"])


@router.post("", status_code=201, response_model=RegisterUserResponse)
async def register(body: RegisterUserRequest, session: Session = Depends(get_session)) -> RegisterUserResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
        birth_date=body.birth_date,
    )
    user = register_user(session, command)
    return RegisterUserResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(body: LoginRequest, response: Response, session: Session = Depends(get_session)) -> LoginResponse:
    result = log_in(session, LogIn(email=body.email, password=body.password))

    response.set_cookie(
        SESSION_COOKIE,
        result.session.token,
        max_age=get_settings().session_ttl_minutes * 60,
        httponly=True,
        secure=get_settings().secure_cookies,
        samesite="strict",
    )

    user = LoggedInUserResponse.model_validate(result.user)
    if result.truck is not None:
        user = user.model_copy(update={"truck_id": result.truck.truck_id, "truck_name": result.truck.truck_name})
    return LoginResponse(user=user)


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response, session: Session = Depends(get_session)) -> MessageResponse:
    log_out(session, request.cookies.get(SESSION_COOKIE))
    response.delete_cookie(SESSION_COOKIE)
    return MessageResponse(message="Logout successful")


@router.get("/profile", response_model=UserResponse)
async def profile(user_id: int | None = Query(None, alias="userId"), session: Session = Depends(get_session)):
    if user_id is None:
        raise ValidationError({"user_id": ["User ID is required"]})
    return get_user(session, user_id)
