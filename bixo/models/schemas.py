"""
Pydantic schemas — mirrors of the Bixo API's response shapes.

Attributes are snake_case; the wire format is camelCase (aliases).
Unknown fields are ignored so API additions never break the client.
"""
from datetime import datetime
from enum import IntEnum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_api(self) -> dict:
        """Request body in the API's camelCase, without unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ── Enums ─────────────────────────────────────────────────────────────────────

class UserType(IntEnum):
    CANDIDATE = 0
    COMPANY = 1
    ADMIN = 2


class RemotePreference(IntEnum):
    REMOTE = 0
    ONSITE = 1
    HYBRID = 2
    FLEXIBLE = 3


class Availability(IntEnum):
    OPEN = 0
    NOT_NOW = 1
    PASSIVE = 2


class SeniorityLevel(IntEnum):
    JUNIOR = 0
    MID = 1
    SENIOR = 2
    LEAD = 3
    PRINCIPAL = 4


class SkillCategory(IntEnum):
    LANGUAGE = 0
    FRAMEWORK = 1
    TOOL = 2
    DATABASE = 3
    CLOUD = 4
    OTHER = 5


class SubscriptionTier(IntEnum):
    FREE = 0
    STARTER = 1
    PRO = 2


class ShortlistStatus(IntEnum):
    PENDING = 0
    PROCESSING = 1
    COMPLETED = 2
    CANCELLED = 3


# ── Location ──────────────────────────────────────────────────────────────────

class Location(ApiModel):
    country: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None
    willing_to_relocate: Optional[bool] = None
    display_text: Optional[str] = None


class HiringLocation(ApiModel):
    is_remote: bool = True
    country: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None
    display_text: Optional[str] = None

    def legacy_display_text(self) -> Optional[str]:
        """Legacy "City, Country" text for endpoints that still read locationPreference."""
        return ", ".join(p for p in (self.city, self.country) if p) or None


# ── Auth ──────────────────────────────────────────────────────────────────────

class AuthResponse(ApiModel):
    user_id: str
    email: str
    user_type: UserType
    access_token: str
    refresh_token: str
    expires_at: Optional[Any] = None             # raw; unparseable values fall back to 24h
    candidate_id: Optional[str] = None
    company_id: Optional[str] = None


class UserResponse(ApiModel):
    id: str
    email: str
    user_type: UserType
    is_active: bool = True
    created_at: Optional[datetime] = None
    last_active_at: Optional[datetime] = None
    candidate_id: Optional[str] = None
    company_id: Optional[str] = None


# ── Candidates ────────────────────────────────────────────────────────────────

class CandidateSkill(ApiModel):
    id: str
    skill_name: str
    confidence_score: float = 0.0
    category: SkillCategory = SkillCategory.OTHER
    is_verified: bool = False


class CandidateProfile(ApiModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    linked_in_url: Optional[str] = None
    cv_file_name: Optional[str] = None
    cv_download_url: Optional[str] = None
    desired_role: Optional[str] = None
    location_preference: Optional[str] = None
    location: Optional[Location] = None
    remote_preference: Optional[RemotePreference] = None
    location_display_text: Optional[str] = None
    availability: Availability = Availability.OPEN
    open_to_opportunities: bool = False
    profile_visible: bool = False
    seniority_estimate: Optional[SeniorityLevel] = None
    skills: list[CandidateSkill] = Field(default_factory=list)
    recommendations_count: int = 0
    profile_views_count: int = 0
    created_at: Optional[datetime] = None
    last_active_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p) or self.email


class CandidateProfileUpdate(ApiModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    linked_in_url: Optional[str] = None
    desired_role: Optional[str] = None
    location: Optional[Location] = None
    remote_preference: Optional[RemotePreference] = None
    availability: Optional[Availability] = None
    open_to_opportunities: Optional[bool] = None
    profile_visible: Optional[bool] = None


class CandidateRecommendation(ApiModel):
    id: str
    recommender_name: Optional[str] = None
    recommender_email: Optional[str] = None
    recommender_role: Optional[str] = None
    recommender_company: Optional[str] = None
    relationship: Optional[str] = None
    content: Optional[str] = None
    is_submitted: bool = False
    is_approved_by_candidate: bool = False
    is_approved_by_admin: bool = False
    submitted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class Notification(ApiModel):
    id: str
    type: str
    title: str
    message: Optional[str] = None
    data: Optional[str] = None
    is_read: bool = False
    created_at: Optional[datetime] = None


# ── Companies ─────────────────────────────────────────────────────────────────

class CompanyProfile(ApiModel):
    id: str
    company_name: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    location: Optional[Location] = None
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    subscription_expires_at: Optional[datetime] = None
    messages_remaining: int = 0
    created_at: Optional[datetime] = None


class TalentCandidate(ApiModel):
    candidate_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    desired_role: Optional[str] = None
    location_preference: Optional[str] = None
    location: Optional[Location] = None
    remote_preference: Optional[RemotePreference] = None
    location_display_text: Optional[str] = None
    availability: Availability = Availability.OPEN
    seniority_estimate: Optional[SeniorityLevel] = None
    top_skills: list[str] = Field(default_factory=list)
    recommendations_count: int = 0
    last_active_at: Optional[datetime] = None
    match_score: float = 0.0
    is_saved: bool = False


class TalentSearchResult(ApiModel):
    candidates: list[TalentCandidate] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 20
    total_pages: int = 0


class SendMessageResponse(ApiModel):
    message_id: Optional[str] = None
    messages_remaining: Optional[int] = None


# ── Messages ──────────────────────────────────────────────────────────────────

class Message(ApiModel):
    id: str
    from_user_id: str
    from_user_name: str
    to_user_id: str
    to_user_name: str
    subject: str = ""
    content: str = ""
    is_read: bool = False
    created_at: Optional[datetime] = None


class Conversation(ApiModel):
    other_user_id: str
    other_user_name: str
    last_message: str = ""
    last_message_at: Optional[datetime] = None
    unread_count: int = 0


# ── Shortlists ────────────────────────────────────────────────────────────────

class ShortlistRequest(ApiModel):
    id: str
    role_title: str
    tech_stack_required: list[str] = Field(default_factory=list)
    seniority_required: Optional[SeniorityLevel] = None
    location_preference: Optional[str] = None
    hiring_location: Optional[HiringLocation] = None
    remote_allowed: bool = False
    additional_notes: Optional[str] = None
    status: ShortlistStatus = ShortlistStatus.PENDING
    price_paid: Optional[float] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    candidates_count: int = 0


class ShortlistCandidate(ApiModel):
    candidate_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    desired_role: Optional[str] = None
    seniority_estimate: Optional[SeniorityLevel] = None
    availability: Availability = Availability.OPEN
    match_score: float = 0.0
    match_reason: Optional[str] = None
    rank: int = 0
    skills: list[str] = Field(default_factory=list)


class ShortlistDetail(ApiModel):
    id: str
    role_title: str
    tech_stack_required: list[str] = Field(default_factory=list)
    seniority_required: Optional[SeniorityLevel] = None
    location_preference: Optional[str] = None
    remote_allowed: bool = False
    additional_notes: Optional[str] = None
    status: ShortlistStatus = ShortlistStatus.PENDING
    created_at: Optional[datetime] = None
    candidates: list[ShortlistCandidate] = Field(default_factory=list)


# ── Recommendation links ──────────────────────────────────────────────────────

class RecommenderFormData(ApiModel):
    candidate_name: Optional[str] = None
    recommender_name: Optional[str] = None
    relationship: Optional[str] = None
    is_already_submitted: bool = False


# ── Admin ─────────────────────────────────────────────────────────────────────

class AdminCandidate(ApiModel):
    id: str
    user_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    desired_role: Optional[str] = None
    availability: Availability = Availability.OPEN
    seniority_estimate: Optional[SeniorityLevel] = None
    profile_visible: bool = False
    skills_count: int = 0
    profile_views_count: int = 0
    created_at: Optional[datetime] = None
    last_active_at: Optional[datetime] = None


class AdminCompany(ApiModel):
    id: str
    user_id: Optional[str] = None
    company_name: Optional[str] = None
    email: Optional[str] = None
    industry: Optional[str] = None
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    messages_remaining: int = 0
    shortlists_count: int = 0
    created_at: Optional[datetime] = None


class AdminShortlist(ApiModel):
    id: str
    company_id: Optional[str] = None
    company_name: str = ""
    role_title: str
    tech_stack_required: list[str] = Field(default_factory=list)
    seniority_required: Optional[SeniorityLevel] = None
    location_preference: Optional[str] = None
    hiring_location: Optional[HiringLocation] = None
    remote_allowed: Optional[bool] = None
    additional_notes: Optional[str] = None
    status: str                                  # admin endpoint returns the status name
    price_paid: Optional[float] = None
    candidates_count: int = 0
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class AdminRecommendation(ApiModel):
    id: str
    candidate_id: Optional[str] = None
    candidate_name: Optional[str] = None
    recommender_name: Optional[str] = None
    recommender_email: Optional[str] = None
    recommender_role: Optional[str] = None
    recommender_company: Optional[str] = None
    relationship: Optional[str] = None
    content: Optional[str] = None
    submitted_at: Optional[datetime] = None


class Page(ApiModel, Generic[T]):
    items: list[T] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 20
    total_pages: int = 0
