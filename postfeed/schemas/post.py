"""Post Schemas — request validation and camelCase response models.

Invariants:
    - PostCreate/PostUpdate: caption required, 5-100 chars inclusive; image required, non-blank
    - CommentCreate: comment required, non-blank
    - Every rule raises PydanticCustomError so its message reaches the client verbatim
    - Responses serialize in camelCase (userId, createdAt) for the web client

Design Decisions:
    - Fields typed `str | None` with validate_default: "missing" gets the same
      custom message as "null", instead of Pydantic's generic "Field required"
    - Caption is not stripped: length is counted on exactly what the user sent
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from postfeed.core.domain_types import CAPTION_MAX_LENGTH, CAPTION_MIN_LENGTH
from postfeed.core.repository_protocols import CommentRecord, PostRecord


class PostCreate(BaseModel):
    """Body of POST /posts/."""
    caption: str | None = Field(None, validate_default=True)
    image: str | None = Field(None, validate_default=True)

    @field_validator("caption")
    @classmethod
    def check_caption(cls, v: str | None) -> str:
        if v is None:
            raise PydanticCustomError("caption_required", "Caption is required")
        if not CAPTION_MIN_LENGTH <= len(v) <= CAPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "caption_length",
                "Caption must be between {min} and {max} characters",
                {"min": CAPTION_MIN_LENGTH, "max": CAPTION_MAX_LENGTH},
            )
        return v

    @field_validator("image")
    @classmethod
    def check_image(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise PydanticCustomError("image_required", "Image is required")
        return v.strip()


class PostUpdate(PostCreate):
    """Body of PUT /posts/{post_id} — same rules as creation."""


class CommentCreate(BaseModel):
    """Body of POST /posts/{post_id}/comment."""
    comment: str | None = Field(None, validate_default=True)

    @field_validator("comment")
    @classmethod
    def check_comment(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise PydanticCustomError("comment_required", "Comment is required")
        return v.strip()


# --- Responses ----------------------------------------------------------------

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CommentResponse(_CamelModel):
    """A comment with its author snapshot."""
    author: dict
    comment: str
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record: CommentRecord) -> "CommentResponse":
        return cls(
            author=record.author,
            comment=record.comment,
            created_at=record.created_at,
        )


class PostResponse(_CamelModel):
    """Public shape of a post."""
    id: UUID
    caption: str
    image: str
    user_id: str
    likes: list[str] = []
    comments: list[CommentResponse] = []
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: PostRecord) -> "PostResponse":
        return cls(
            id=record.id,
            caption=record.caption,
            image=record.image,
            user_id=record.user_id,
            likes=list(record.likes),
            comments=[CommentResponse.from_record(c) for c in record.comments],
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
