# campus_connect/api/schemas/user_schema.py
from pydantic import BaseModel, ConfigDict, Field

from campus_connect.infrastructure.database.models.user_model import UserModel
from campus_connect.services.user_service import ProfileView


class UserMiniResponse(BaseModel):
    id: int
    name: str
    email: str
    profile_photo: str | None = None

    @classmethod
    def from_model(cls, user: UserModel | None) -> "UserMiniResponse | None":
        if user is None:
            return None
        return cls(id=user.id, name=user.name, email=user.email, profile_photo=user.profile_photo or None)


class UserSearchResult(BaseModel):
    id: int
    name: str
    email: str


class UserResponse(BaseModel):
    """Usuário sem campos de senha/refresh."""

    id: int
    name: str
    email: str
    portfolio_link: str = ""
    linkedin_link: str = ""
    github_link: str = ""
    leetcode_link: str = ""
    bio: str = ""
    profile_photo: str | None = None

    @classmethod
    def from_model(cls, user: UserModel) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            portfolio_link=user.portfolio_link or "",
            linkedin_link=user.linkedin_link or "",
            github_link=user.github_link or "",
            leetcode_link=user.leetcode_link or "",
            bio=user.bio or "",
            profile_photo=user.profile_photo or None,
        )


class MeResponse(UserResponse):
    department: str
    year: str
    connections_count: int

    @classmethod
    def from_view(cls, view: ProfileView) -> "MeResponse":
        return cls(
            **UserResponse.from_model(view.user).model_dump(),
            department=view.department,
            year=view.year,
            connections_count=view.connections_count,
        )


class ProfileResponse(MeResponse):
    is_connected: bool
    is_own_profile: bool

    @classmethod
    def from_view(cls, view: ProfileView) -> "ProfileResponse":
        return cls(
            **MeResponse.from_view(view).model_dump(),
            is_connected=view.is_connected,
            is_own_profile=view.is_own_profile,
        )


class UpdateProfileRequest(BaseModel):
    # campos ausentes ficam fora do update (model_dump(exclude_unset=True))
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, max_length=100)
    portfolio_link: str | None = Field(default=None, max_length=300)
    linkedin_link: str | None = Field(default=None, max_length=300)
    github_link: str | None = Field(default=None, max_length=300)
    leetcode_link: str | None = Field(default=None, max_length=300)
    bio: str | None = None
    profile_photo: str | None = None
