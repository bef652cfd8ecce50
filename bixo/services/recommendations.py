"""
Public recommendation links. A recommender opens /recommendation/<token>
and writes a few lines about the candidate. No sign-in needed.
"""
from typing import Optional

from bixo.core.api import ApiClient
from bixo.core.envelope import ApiResponse
from bixo.models.schemas import RecommenderFormData

MIN_CONTENT_LENGTH = 50


def get_form(api: ApiClient, token: str) -> ApiResponse:
    response = api.get(f"/recommendations/{token}").cast(RecommenderFormData.model_validate)
    if not response.success:
        return ApiResponse.fail(response.error or "Invalid or expired recommendation link")
    return response


def submit(
    api: ApiClient,
    token: str,
    content: str,
    recommender_role: Optional[str] = None,
    recommender_company: Optional[str] = None,
) -> ApiResponse:
    content = (content or "").strip()
    if not content:
        return ApiResponse.fail("Please write your recommendation")
    if len(content) < MIN_CONTENT_LENGTH:
        return ApiResponse.fail(f"Recommendation should be at least {MIN_CONTENT_LENGTH} characters")

    body = {"content": content}
    if recommender_role and recommender_role.strip():
        body["recommenderRole"] = recommender_role.strip()
    if recommender_company and recommender_company.strip():
        body["recommenderCompany"] = recommender_company.strip()
    return api.post(f"/recommendations/{token}/submit", body)


def word_count(text: str) -> int:
    return len((text or "").split())
