"""User Domain Model -- referenced by deadlines, never owned by them"""

from pydantic import BaseModel, Field

from .enums import UserProfile


class User(BaseModel):
    """Firm user"""

    id: str = Field(description="Unique identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Login e-mail")
    profile: UserProfile = Field(description="Role")
    phone: str | None = Field(default=None, description="Phone number")
