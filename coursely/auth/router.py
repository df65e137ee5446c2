"""Authentication API endpoints: registration and login."""

from fastapi import APIRouter, status

from coursely.auth.dependencies import AuthServiceDep
from coursely.auth.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserIdentity,
)
from coursely.core.errors import CourselyError, handle_service_error


router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    responses={
        400: {"description": "Missing field"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    data: RegisterRequest,
    auth_service: AuthServiceDep,
) -> RegisterResponse:
    """Create a user account and return its id."""
    try:
        user_id = await auth_service.register_user(
            full_name=data.name,
            email=data.email,
            password=data.password,
        )
    except CourselyError as e:
        raise handle_service_error(e) from e
    return RegisterResponse(message="User created!", user_id=user_id)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="User login",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(
    data: LoginRequest,
    auth_service: AuthServiceDep,
) -> LoginResponse:
    """Check credentials and return the user's identity."""
    try:
        user = await auth_service.authenticate_user(data.email, data.password)
    except CourselyError as e:
        raise handle_service_error(e) from e
    return LoginResponse(
        message="Login successful!",
        user=UserIdentity(id=user.id, name=user.full_name),
    )
