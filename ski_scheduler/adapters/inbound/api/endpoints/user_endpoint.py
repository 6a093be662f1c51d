# ski_scheduler/adapters/inbound/api/endpoints/user_endpoint.py

from fastapi import APIRouter, Depends, status

from ski_scheduler.adapters.inbound.api.deps import get_current_credentials, get_lesson_service
from ski_scheduler.adapters.inbound.api.errors import ApiError
from ski_scheduler.application.use_cases.lesson_use_cases import AsyncLessonService
from ski_scheduler.domain.exceptions import DomainException
from ski_scheduler.domain.models.user_domain_model import Credentials

router = APIRouter()


@router.get(
    "/users",
    summary="List Users - Admin only",
    description="Lists every user without password hashes, e.g. to pick an instructor for a lesson.",
)
async def list_users(
        credentials: Credentials = Depends(get_current_credentials),
        service: AsyncLessonService = Depends(get_lesson_service),
):
    try:
        users = await service.list_users(credentials)
    except DomainException as e:
        raise ApiError.from_domain(status.HTTP_400_BAD_REQUEST, "Failed to retrieve users", e)

    return {"message": "Users retrieved", "users": [user.to_json() for user in users]}
