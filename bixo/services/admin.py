"""
Admin review endpoints: candidates, companies, shortlists, recommendations.
"""
import math
from typing import Optional

from pydantic import TypeAdapter

from bixo.core.api import ApiClient
from bixo.core.config import get_settings
from bixo.core.envelope import ApiResponse
from bixo.models.schemas import (
    AdminCandidate, AdminCompany, AdminRecommendation, AdminShortlist, Page, ShortlistStatus,
)

settings = get_settings()

_shortlists = TypeAdapter(list[AdminShortlist])
_recommendations = TypeAdapter(list[AdminRecommendation])

REJECTION_REASONS = [
    "Low quality / lacks substance",
    "Appears exaggerated or false",
    "Unprofessional language",
    "Generic / not specific to candidate",
    "Potential conflict of interest",
]


def total_pages(total_count: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(max(total_count, 0) / page_size)


def status_filter(name: Optional[str]) -> Optional[int]:
    """Status name to the API value: "completed" -> 2. "all", unknown or empty -> None."""
    if not name:
        return None
    member = ShortlistStatus.__members__.get(name.strip().upper())
    return int(member) if member is not None else None


# ── Candidates ────────────────────────────────────────────────────────────────

def list_candidates(
    api: ApiClient,
    *,
    page: int = 1,
    page_size: Optional[int] = None,
    search: Optional[str] = None,
    visible: Optional[bool] = None,
) -> ApiResponse:
    params = {
        "page": page,
        "pageSize": page_size or settings.ADMIN_PAGE_SIZE,
        "search": search or None,
        "visible": str(visible).lower() if visible is not None else None,
    }
    return api.get("/admin/candidates", params=params).cast(Page[AdminCandidate].model_validate)


def set_candidate_visibility(api: ApiClient, candidate_id: str, visible: bool) -> ApiResponse:
    return api.put(f"/admin/candidates/{candidate_id}/visibility", {"visible": visible})


# ── Companies ─────────────────────────────────────────────────────────────────

def list_companies(
    api: ApiClient,
    *,
    page: int = 1,
    page_size: Optional[int] = None,
    search: Optional[str] = None,
) -> ApiResponse:
    params = {
        "page": page,
        "pageSize": page_size or settings.ADMIN_PAGE_SIZE,
        "search": search or None,
    }
    return api.get("/admin/companies", params=params).cast(Page[AdminCompany].model_validate)


def set_company_messages(api: ApiClient, company_id: str, messages_remaining: int) -> ApiResponse:
    return api.put(
        f"/admin/companies/{company_id}/messages", {"messagesRemaining": messages_remaining}
    )


# ── Shortlists ────────────────────────────────────────────────────────────────

def list_shortlists(
    api: ApiClient,
    *,
    page: int = 1,
    page_size: Optional[int] = None,
    status: Optional[str] = None,
) -> ApiResponse:
    # This endpoint answers with a bare list, not a page.
    params = {
        "page": page,
        "pageSize": page_size or settings.ADMIN_PAGE_SIZE,
        "status": status_filter(status),
    }
    return api.get("/admin/shortlists", params=params).cast(_shortlists.validate_python)


def update_shortlist_status(api: ApiClient, shortlist_id: str, status: str) -> ApiResponse:
    return api.put(f"/admin/shortlists/{shortlist_id}/status", {"status": status})


# ── Recommendations ───────────────────────────────────────────────────────────

def list_recommendations(api: ApiClient) -> ApiResponse:
    return api.get("/admin/recommendations").cast(_recommendations.validate_python)


def approve_recommendation(api: ApiClient, recommendation_id: str) -> ApiResponse:
    return api.post(f"/admin/recommendations/{recommendation_id}/approve")


def reject_recommendation(api: ApiClient, recommendation_id: str, reason: str) -> ApiResponse:
    if not reason or not reason.strip():
        return ApiResponse.fail("A rejection reason is required")
    return api.post(f"/admin/recommendations/{recommendation_id}/reject", {"reason": reason.strip()})
