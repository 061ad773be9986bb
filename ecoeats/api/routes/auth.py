from fastapi import APIRouter, Depends, HTTPException

from ecoeats.api.dependencies import get_current_user, get_service
from ecoeats.domain.User import User
from ecoeats.logic.rewards.levels import level_progress
from ecoeats.logic.service import EcoEatsService
from ecoeats.utilities.validators import LoginInput, SignUpInput

router = APIRouter(prefix="/api/auth", tags=["auth"])


def user_payload(user: User) -> dict:
    data = user.to_dict(include_secret=False)
    data['level_progress'] = level_progress(user.eco_points)
    return data


@router.post("/signup")
def signup(payload: SignUpInput, service: EcoEatsService = Depends(get_service)):
    user = service.sign_up(payload.name, payload.email, payload.password, payload.user_type)
    return user_payload(user)


@router.post("/login")
def login(payload: LoginInput, service: EcoEatsService = Depends(get_service)):
    user = service.login(payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return user_payload(user)


@router.post("/logout")
def logout(service: EcoEatsService = Depends(get_service)):
    service.logout()
    return {"ok": True}


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return user_payload(user)
