from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    confirm_password: str

class LoginResponse(BaseModel):
    message: str
    token_set: bool

class RegisterResponse(BaseModel):
    message: str

class LogoutResponse(BaseModel):
    message: str

class AuthTokenPayload(BaseModel):
    sub: str
    exp: Optional[datetime] = None
