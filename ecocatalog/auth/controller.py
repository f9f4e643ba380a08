# ecocatalog/auth/controller.py
from typing import Annotated
from fastapi import APIRouter, Depends
from starlette import status

from . import models
from . import service
from ..database.core import DbSession
from ..users.models import UserEnvelope
from ..users.service import UserService

router = APIRouter(prefix='/auth', tags=['auth'])


@router.post("/signup", response_model=models.AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(register_user_request: models.RegisterUserRequest, db: DbSession):
    user = service.register_user(db, register_user_request)
    return service.build_auth_response(user)


@router.post("/login", response_model=models.AuthResponse, status_code=status.HTTP_200_OK)
def login(login_request: models.LoginRequest, db: DbSession):
    user = service.authenticate_user(login_request.email, login_request.password, db)
    return service.build_auth_response(user)


@router.post("/logout")
def logout(token: Annotated[str, Depends(service.oauth2_bearer)]):
    """
    Logs out the user by adding their current token to the denylist.
    """
    if service.revoke_token(token):
        return {"message": "Logged out successfully"}
    return {"message": "Token is already expired."}


@router.get("/me", response_model=UserEnvelope)
def read_current_user(current_user: service.CurrentUser, db: DbSession):
    user = UserService.get_user_by_id(db, current_user.get_uuid())
    return {"user": user}
