# ski_scheduler/adapters/inbound/api/endpoints/lesson_endpoint.py

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, Header, status

from ski_scheduler.adapters.inbound.api.deps import get_current_credentials, get_lesson_service
from ski_scheduler.adapters.inbound.api.errors import ApiError
from ski_scheduler.application.dtos.lesson_dto import CreateLessonRequest
from ski_scheduler.application.use_cases.lesson_use_cases import AsyncLessonService
from ski_scheduler.domain.exceptions import DomainException
from ski_scheduler.domain.models.user_domain_model import Credentials

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/create-lesson",
    status_code=status.HTTP_201_CREATED,
    summary="Create Lesson - Admin only",
)
async def create_lesson(
        request_body: CreateLessonRequest,
        credentials: Credentials = Depends(get_current_credentials),
        service: AsyncLessonService = Depends(get_lesson_service),
):
    try:
        lesson = await service.create_lesson(credentials, request_body.lesson_data)
    except DomainException as e:
        raise ApiError.from_domain(422, "Failed to create lesson", e)

    return {"message": "Lesson created successfully", "lesson": lesson.to_json()}


@router.get(
    "/lessons",
    summary="Retrieve Lessons - Own calendar or the board of available lessons",
    description="With the header `available: true` returns unassigned lessons, "
                "otherwise the lessons assigned to the caller.",
)
async def retrieve_lessons(
        available: str = Header("false"),
        credentials: Credentials = Depends(get_current_credentials),
        service: AsyncLessonService = Depends(get_lesson_service),
):
    available_only = available.lower() == "true"
    try:
        lessons = await service.retrieve_lessons(credentials, available_only)
    except DomainException as e:
        raise ApiError.from_domain(status.HTTP_400_BAD_REQUEST, "Failed to retrieve lessons", e)

    message = (
        "Available lessons retrieved"
        if available_only
        else f"Lessons retrieved for user ID {credentials.user_id}"
    )
    return {"message": message, "lessons": [lesson.to_json() for lesson in lessons]}


@router.patch(
    "/lessons/{lesson_id}/assign",
    summary="Claim Lesson - Assigns an unassigned lesson to the caller",
)
async def switch_lesson_assignment(
        lesson_id: UUID,
        credentials: Credentials = Depends(get_current_credentials),
        service: AsyncLessonService = Depends(get_lesson_service),
):
    try:
        lesson = await service.claim_lesson(credentials, lesson_id)
    except DomainException as e:
        raise ApiError.from_domain(status.HTTP_400_BAD_REQUEST, "Failed to switch lesson assignment", e)

    return {"message": "Lesson assignment updated", "lesson": lesson.to_json()}


@router.delete(
    "/lessons/{lesson_id}",
    summary="Remove Lesson - Admin only",
)
async def remove_lesson(
        lesson_id: UUID,
        credentials: Credentials = Depends(get_current_credentials),
        service: AsyncLessonService = Depends(get_lesson_service),
):
    try:
        lesson = await service.remove_lesson(credentials, lesson_id)
    except DomainException as e:
        raise ApiError.from_domain(status.HTTP_400_BAD_REQUEST, "Failed to remove lesson", e)

    return {"message": "Lesson successfully removed", "lesson": lesson.to_json()}
