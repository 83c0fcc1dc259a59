# campus_connect/api/schemas/auth_schema.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=200)


class LoginRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1, max_length=200)


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Login successful"
    access_token: str = Field(alias="accessToken")


class RefreshResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
