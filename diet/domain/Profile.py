"""Profile domain entity, provisioned once per registered user."""
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


class Profile:
    def __init__(self, user_id: str, email: str = "", full_name: str = "", token: str = "",
                 id: Optional[str] = None, created_at: Optional[str] = None,
                 updated_at: Optional[str] = None):
        self.id = id or str(uuid4())
        self.user_id = user_id
        self.email = email
        # Registration without a name shows the email instead
        self.full_name = full_name or email
        self.token = token
        self.created_at = created_at or datetime.now(timezone.utc).isoformat()
        self.updated_at = updated_at or self.created_at

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "user_id", "email", "full_name", "token", "created_at", "updated_at"}
        return Profile(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        '''Row for persistence; includes the access token.'''
        return {
            "id": self.id,
            "user_id": self.user_id,
            "email": self.email,
            "full_name": self.full_name,
            "token": self.token,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_public_dict(self):
        d = self.to_dict()
        d.pop("token", None)
        return d
