"""
Candidate self-service endpoints: profile, CV, notifications, recommendations.
"""
from typing import Optional

from pydantic import TypeAdapter

from bixo.core.api import ApiClient
from bixo.core.envelope import ApiResponse
from bixo.models.schemas import (
    CandidateProfile, CandidateProfileUpdate, CandidateRecommendation, Notification,
)

_notifications = TypeAdapter(list[Notification])
_recommendations = TypeAdapter(list[CandidateRecommendation])

CV_EXTENSIONS = {".pdf", ".doc", ".docx"}


def get_profile(api: ApiClient) -> ApiResponse:
    return api.get("/candidates/profile").cast(CandidateProfile.model_validate)


def update_profile(api: ApiClient, update: CandidateProfileUpdate) -> ApiResponse:
    return api.put("/candidates/profile", update.to_api())


def get_notifications(api: ApiClient) -> ApiResponse:
    return api.get("/candidates/notifications").cast(_notifications.validate_python)


def list_my_recommendations(api: ApiClient) -> ApiResponse:
    return api.get("/candidates/me/recommendations").cast(_recommendations.validate_python)


def approve_my_recommendation(api: ApiClient, recommendation_id: str) -> ApiResponse:
    return api.post(f"/candidates/me/recommendations/{recommendation_id}/approve")


def delete_my_recommendation(api: ApiClient, recommendation_id: str) -> ApiResponse:
    return api.delete(f"/candidates/me/recommendations/{recommendation_id}")


def upload_cv(
    api: ApiClient, filename: str, content: bytes, content_type: Optional[str] = None
) -> ApiResponse:
    """Upload a CV (PDF / DOC / DOCX) as multipart ``file``."""
    suffix = "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if suffix not in CV_EXTENSIONS:
        return ApiResponse.fail(f"Unsupported file type: {suffix or filename}")
    return api.upload_file(
        "/candidates/cv",
        files={"file": (filename, content, content_type or "application/octet-stream")},
    )
