from fastapi import APIRouter, Body, Depends, HTTPException

from diet.api.deps import get_current_user, get_store
from diet.domain.Profile import Profile
from diet.infra.Profile_Repository import ProfileRepository
from diet.infra.Store import JsonStore
from diet.utilities.validators import RegisterInput

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/auth/register", status_code=201)
def register(payload: RegisterInput = Body(...), store: JsonStore = Depends(get_store)):
    """Create an account; the profile row is provisioned with it."""
    try:
        profile = ProfileRepository(store).provision(payload.email, payload.full_name)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"user_id": profile.user_id, "token": profile.token, "profile": profile.to_public_dict()}


@router.get("/profile")
def get_profile(user: Profile = Depends(get_current_user)):
    return user.to_public_dict()
