"""Profile repository: account provisioning and token lookup."""
import secrets
import logging
from typing import Optional
from uuid import uuid4

from diet.domain.Profile import Profile
from diet.infra.Store import JsonStore
from diet.infra.paths import PROFILES_FILE

logger = logging.getLogger(__name__)


class ProfileRepository:
    def __init__(self, store: Optional[JsonStore] = None):
        self.store = store or JsonStore()

    def provision(self, email: str, full_name: Optional[str] = None) -> Profile:
        """Register a new user and create their profile row in one step."""
        with self.store.lock:
            if self.get_by_email(email) is not None:
                raise ValueError("An account with this email already exists")
            profile = Profile(
                user_id=str(uuid4()),
                email=email,
                full_name=full_name or "",
                token=secrets.token_urlsafe(32),
            )
            self.store.insert(PROFILES_FILE, profile.to_dict())
        logger.info("Provisioned profile for user %s", profile.user_id)
        return profile

    def get_by_email(self, email: str) -> Optional[Profile]:
        rows = self.store.select(PROFILES_FILE, lambda r: r.get("email") == email)
        return Profile.from_dict(rows[0]) if rows else None

    def get_by_token(self, token: str) -> Optional[Profile]:
        if not token:
            return None
        rows = self.store.select(PROFILES_FILE, lambda r: secrets.compare_digest(str(r.get("token", "")), token))
        return Profile.from_dict(rows[0]) if rows else None

    def get(self, user_id: str) -> Optional[Profile]:
        rows = self.store.select(PROFILES_FILE, lambda r: r.get("user_id") == user_id)
        return Profile.from_dict(rows[0]) if rows else None
