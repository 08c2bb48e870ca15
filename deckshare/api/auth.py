from typing import Annotated

from fastapi import APIRouter, Depends, status

from deckshare.schemas.auth import LoginRequest, SignupRequest, UserRead
from deckshare.schemas.common import APIResponse
from deckshare.services.user import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest, service: Annotated[UserService, Depends()]
) -> APIResponse[UserRead]:
    user = await service.signup(body.username, body.password)
    return APIResponse(data=UserRead.model_validate(user), message="User registered successfully")


@router.post("/login")
async def login(
    body: LoginRequest, service: Annotated[UserService, Depends()]
) -> APIResponse[UserRead]:
    user = await service.login(body.username, body.password)
    return APIResponse(data=UserRead.model_validate(user))
