"""
Auth routes: signup and login.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..responses import success_response
from ..schemas import LoginRequest, LoginResponse, SignupRequest, UserResponse
from ..services import AuthServiceDep

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup")
async def signup(request: SignupRequest, service: AuthServiceDep) -> JSONResponse:
    """Create an account. The response never contains the password."""
    user = service.signup(
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role,
    )
    return success_response("User registered successfully", UserResponse.from_db(user), status_code=201)


@router.post("/login")
async def login(request: LoginRequest, service: AuthServiceDep) -> JSONResponse:
    """Exchange credentials for a bearer token."""
    token, user = service.login(request.email, request.password)
    return success_response(
        "Login successful",
        LoginResponse(token=token, user=UserResponse.from_db(user)),
    )
