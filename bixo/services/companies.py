"""
Company endpoints: talent search, saved candidates, outreach messages.
"""
from typing import Optional

from bixo.core.api import ApiClient
from bixo.core.config import get_settings
from bixo.core.envelope import ApiResponse
from bixo.models.schemas import (
    Availability, SendMessageResponse, SeniorityLevel, TalentSearchResult,
)

settings = get_settings()


def search_talent(
    api: ApiClient,
    *,
    page: int = 1,
    page_size: Optional[int] = None,
    skills: Optional[str] = None,
    seniority: Optional[SeniorityLevel] = None,
    availability: Optional[Availability] = None,
) -> ApiResponse:
    params = {
        "page": page,
        "pageSize": page_size or settings.TALENT_PAGE_SIZE,
        "skills": skills.strip() if skills and skills.strip() else None,
        "seniority": int(seniority) if seniority is not None else None,
        "availability": int(availability) if availability is not None else None,
    }
    return api.get("/companies/talent", params=params).cast(TalentSearchResult.model_validate)


def save_candidate(api: ApiClient, candidate_id: str) -> ApiResponse:
    return api.post("/companies/candidates/save", {"candidateId": candidate_id})


def unsave_candidate(api: ApiClient, candidate_id: str) -> ApiResponse:
    return api.delete(f"/companies/candidates/save/{candidate_id}")


def toggle_saved(api: ApiClient, candidate_id: str, currently_saved: bool) -> ApiResponse:
    if currently_saved:
        return unsave_candidate(api, candidate_id)
    return save_candidate(api, candidate_id)


def send_message(
    api: ApiClient, candidate_id: str, content: str, subject: Optional[str] = None
) -> ApiResponse:
    content = (content or "").strip()
    if not content:
        return ApiResponse.fail("Message content is required")
    body = {"content": content}
    if subject and subject.strip():
        body["subject"] = subject.strip()
    return api.post(f"/companies/talent/{candidate_id}/message", body).cast(
        SendMessageResponse.model_validate
    )
