"""
API dependencies: data directory, generation service and the caller's identity.

Tests override get_data_dir and get_generation_service through
app.dependency_overrides.
"""
from pathlib import Path
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from diet.domain.Profile import Profile
from diet.infra.Profile_Repository import ProfileRepository
from diet.infra.Store import JsonStore
from diet.infra.paths import DATA_DIR
from diet.logic.planning.generation_service import PlanGenerationService
from diet.utilities.config import ProviderConfig

security = HTTPBearer(auto_error=False)


def get_data_dir() -> Path:
    return DATA_DIR


def get_store(data_dir: Path = Depends(get_data_dir)) -> JsonStore:
    return JsonStore(data_dir)


def get_generation_service() -> PlanGenerationService:
    return PlanGenerationService(ProviderConfig.from_env())


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: JsonStore = Depends(get_store),
) -> Profile:
    """
    Resolve the caller from the access token.

    Expects:
        Authorization: Bearer <token>
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Missing Authorization Bearer token")
    profile = ProfileRepository(store).get_by_token(credentials.credentials)
    if profile is None:
        raise HTTPException(status_code=401, detail="Invalid access token")
    return profile
