"""Announcement request/response schemas."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, StringConstraints

from packages.core.announcements.models import AnnouncementRecipient

Topic = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=3, max_length=200),
]
Details = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=10, max_length=4000),
]
RecipientId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class OrganizationAnnouncementRequest(BaseModel):
    """Announcement to every member of the caller's organization."""

    mode: Literal["ORGANIZATION"]
    topic: Topic = Field(..., description="Announcement headline")
    details: Details = Field(..., description="Announcement body")


class SpecificAnnouncementRequest(BaseModel):
    """Announcement to an enumerated set of teammates."""

    mode: Literal["SPECIFIC"]
    topic: Topic = Field(..., description="Announcement headline")
    details: Details = Field(..., description="Announcement body")
    recipient_ids: list[RecipientId] = Field(
        ...,
        min_length=1,
        description="Ids of the teammates to notify",
    )


AnnouncementSendRequest = Annotated[
    Union[OrganizationAnnouncementRequest, SpecificAnnouncementRequest],
    Field(discriminator="mode"),
]


class AnnouncementSendResponse(BaseModel):
    """Result of a send: how many delivery records were written."""

    delivered_count: int
    batch_id: str


class RecipientDirectoryResponse(BaseModel):
    """Teammates an announcement can be sent to."""

    employees: list[AnnouncementRecipient]
