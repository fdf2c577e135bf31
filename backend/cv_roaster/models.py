"""Pydantic request/response models for the cv-roaster API.

Wire format is camelCase (wordCount, profileUrl, …); Python side is snake_case.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Roast requests — one per way of asking for a roast
# ---------------------------------------------------------------------------


class DocumentRoastRequest(BaseModel):
    """CV text extracted from an uploaded document."""
    kind: Literal["cv"] = "cv"
    text: str


class ProfileUrlRoastRequest(BaseModel):
    """LinkedIn profile URL only — content comes from the placeholder."""
    kind: Literal["linkedin_url"] = "linkedin_url"
    url: str


class ProfileContentRoastRequest(BaseModel):
    """LinkedIn profile content pasted by the user."""
    kind: Literal["linkedin_content"] = "linkedin_content"
    content: str
    url: str | None = None


RoastRequest = Annotated[
    Union[DocumentRoastRequest, ProfileUrlRoastRequest, ProfileContentRoastRequest],
    Field(discriminator="kind"),
]


class RoastResult(BaseModel):
    """Generated critique plus whatever metadata the request kind produces."""
    model_config = ConfigDict(frozen=True)

    roast: str
    word_count: int | None = None
    extracted_length: int | None = None
    profile_url: str | None = None


# ---------------------------------------------------------------------------
# HTTP bodies
# ---------------------------------------------------------------------------


class LinkedInRoastBody(_CamelModel):
    """JSON body of POST /api/roast/linkedin."""
    url: str | None = Field(default=None, description="LinkedIn profile URL (linkedin.com/in/...)")
    content: str | None = Field(default=None, description="Pasted profile content")


class CVRoastResponse(_CamelModel):
    success: bool = True
    roast: str
    word_count: int
    extracted_length: int


class LinkedInRoastResponse(_CamelModel):
    success: bool = True
    roast: str
    profile_url: str | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str
    version: str
    uptime_seconds: int
