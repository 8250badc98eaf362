from pydantic import BaseModel, Field
from typing import Optional

class User(BaseModel):
    id: int
    email: str
    preferences: Optional[dict] = None
    hashed_password: str = Field(exclude=True)

    @property
    def user_id(self) -> str:
        """Opaque id the services key rows by."""
        return str(self.id)
