"""
Company shortlist requests.
"""
from typing import Optional

from pydantic import TypeAdapter

from bixo.core.api import ApiClient
from bixo.core.envelope import ApiResponse
from bixo.models.schemas import HiringLocation, SeniorityLevel, ShortlistDetail, ShortlistRequest

_shortlists = TypeAdapter(list[ShortlistRequest])


def parse_tech_stack(text: str) -> list[str]:
    """Comma-separated text to a clean list: "python, , docker" -> ["python", "docker"]."""
    return [s.strip() for s in (text or "").split(",") if s.strip()]


def list_shortlists(api: ApiClient) -> ApiResponse:
    return api.get("/shortlists").cast(_shortlists.validate_python)


def get_shortlist(api: ApiClient, shortlist_id: str) -> ApiResponse:
    return api.get(f"/shortlists/{shortlist_id}").cast(ShortlistDetail.model_validate)


def request_shortlist(
    api: ApiClient,
    role_title: str,
    tech_stack: str,
    *,
    seniority: Optional[SeniorityLevel] = None,
    hiring_location: Optional[HiringLocation] = None,
    notes: Optional[str] = None,
) -> ApiResponse:
    """
    Submit a shortlist request.

    ``locationPreference`` and ``remoteAllowed`` are legacy fields the API
    still reads; they are derived from the hiring location.
    """
    if not role_title or not role_title.strip():
        return ApiResponse.fail("Role title is required")
    hiring_location = hiring_location or HiringLocation(is_remote=True)
    return api.post("/shortlists/request", {
        "roleTitle": role_title.strip(),
        "techStackRequired": parse_tech_stack(tech_stack),
        "seniorityRequired": int(seniority) if seniority is not None else None,
        "hiringLocation": hiring_location.to_api(),
        "locationPreference": hiring_location.legacy_display_text(),
        "remoteAllowed": hiring_location.is_remote,
        "additionalNotes": notes.strip() if notes and notes.strip() else None,
    })
