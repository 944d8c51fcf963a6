"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Validation messages are plain sentences; the error handler reports them
as {"errors": [{"msg", "param", "location"}]}.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from email_validator import EmailNotValidError, validate_email
from typing import Optional, List, Dict, Union
from datetime import datetime


def _require(value, message: str):
    """Reject None and blank strings with a readable message."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(message)
    return value


def _check_email(value: Optional[str]) -> str:
    """Check email format but keep the address exactly as given."""
    if not value:
        raise ValueError("Please provide a valid email.")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Please provide a valid email.")
    return value


# Request fields whose Python name differs from the JSON key
FIELD_WIRE_NAMES = {"from_date": "from"}


class MongoModel(BaseModel):
    """Base for documents exposed with their Mongo `_id`."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    name: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("name")
    @classmethod
    def name_required(cls, v):
        return _require(v, "Name is required.")

    @field_validator("email")
    @classmethod
    def email_valid(cls, v):
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def password_length(cls, v):
        if v is None or len(v) < 6:
            raise ValueError("Please enter a password with 6 or more characters.")
        return v


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("email")
    @classmethod
    def email_valid(cls, v):
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def password_present(cls, v):
        if v is None:
            raise ValueError("Password is required.")
        return v


class TokenResponse(BaseModel):
    token: str


class UserResponse(MongoModel):
    name: str
    email: str
    avatar: Optional[str] = None
    date: Optional[datetime] = None


class UserSummary(MongoModel):
    name: Optional[str] = None
    avatar: Optional[str] = None


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileRequest(BaseModel):
    """Create/update body. Social links arrive as top-level fields."""
    status: Optional[str] = Field(None, validate_default=True)
    skills: Optional[str] = Field(None, validate_default=True)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status")
    @classmethod
    def status_required(cls, v):
        return _require(v, "Status is required.")

    @field_validator("skills")
    @classmethod
    def skills_required(cls, v):
        return _require(v, "Skills is required.")


class ExperienceCreate(BaseModel):
    title: Optional[str] = Field(None, validate_default=True)
    company: Optional[str] = Field(None, validate_default=True)
    from_date: Optional[datetime] = Field(None, alias="from", validate_default=True)
    location: Optional[str] = None
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, v):
        return _require(v, "Title is required.")

    @field_validator("company")
    @classmethod
    def company_required(cls, v):
        return _require(v, "Company is required.")

    @field_validator("from_date")
    @classmethod
    def from_required(cls, v):
        return _require(v, "From date is required.")


class ExperienceUpdate(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    from_date: Optional[datetime] = Field(None, alias="from")
    location: Optional[str] = None
    to: Optional[datetime] = None
    current: Optional[bool] = None
    description: Optional[str] = None


class EducationCreate(BaseModel):
    school: Optional[str] = Field(None, validate_default=True)
    degree: Optional[str] = Field(None, validate_default=True)
    fieldofstudy: Optional[str] = Field(None, validate_default=True)
    from_date: Optional[datetime] = Field(None, alias="from", validate_default=True)
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    @field_validator("school")
    @classmethod
    def school_required(cls, v):
        return _require(v, "School is required.")

    @field_validator("degree")
    @classmethod
    def degree_required(cls, v):
        return _require(v, "Degree is required.")

    @field_validator("fieldofstudy")
    @classmethod
    def field_required(cls, v):
        return _require(v, "Field of study is required.")

    @field_validator("from_date")
    @classmethod
    def from_required(cls, v):
        return _require(v, "From date is required.")


class EducationUpdate(BaseModel):
    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_date: Optional[datetime] = Field(None, alias="from")
    to: Optional[datetime] = None
    current: Optional[bool] = None
    description: Optional[str] = None


class ExperienceResponse(MongoModel):
    title: str
    company: str
    from_date: datetime = Field(..., alias="from")
    location: Optional[str] = None
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class EducationResponse(MongoModel):
    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime = Field(..., alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class ProfileResponse(MongoModel):
    user: Optional[Union[UserSummary, str]] = None
    status: str
    skills: List[str] = []
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: Dict[str, str] = {}
    experience: List[ExperienceResponse] = []
    education: List[EducationResponse] = []
    date: Optional[datetime] = None


# ============================================================
# POST SCHEMAS
# ============================================================

class PostCreate(BaseModel):
    text: Optional[str] = Field(None, validate_default=True)

    @field_validator("text")
    @classmethod
    def text_required(cls, v):
        return _require(v, "Text is required.")


class CommentCreate(BaseModel):
    text: Optional[str] = Field(None, validate_default=True)

    @field_validator("text")
    @classmethod
    def text_required(cls, v):
        return _require(v, "Text field cannot be empty.")


class LikeResponse(MongoModel):
    user: str


class CommentResponse(MongoModel):
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: Optional[datetime] = None


class PostResponse(MongoModel):
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[LikeResponse] = []
    comments: List[CommentResponse] = []
    date: Optional[datetime] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    msg: str
