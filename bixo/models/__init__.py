from .schemas import (
    UserType, Availability, SeniorityLevel, ShortlistStatus,
    AuthResponse, UserResponse, CandidateProfile, TalentSearchResult,
    ShortlistRequest, ShortlistDetail, Notification, Page,
)

__all__ = [
    "UserType", "Availability", "SeniorityLevel", "ShortlistStatus",
    "AuthResponse", "UserResponse", "CandidateProfile", "TalentSearchResult",
    "ShortlistRequest", "ShortlistDetail", "Notification", "Page",
]
