"""Enrollment and lesson progress API endpoints.

Provides routes for:
- Enrolling in and unenrolling from a course
- Setting a lesson's completion flag
- Listing a user's progress across enrolled courses
"""

from fastapi import APIRouter

from coursely.core.context import set_user_id
from coursely.core.errors import CourselyError, handle_service_error
from coursely.core.schemas import MessageResponse

from .dependencies import ProgressServiceDep
from .schemas import EnrollRequest, LessonCompletionRequest, LessonProgressResponse


router = APIRouter(tags=["progress"])


@router.post(
    "/enroll",
    response_model=MessageResponse,
    summary="Enroll in course",
    responses={
        400: {"description": "Missing field"},
        409: {"description": "Already enrolled"},
    },
)
async def enroll(
    data: EnrollRequest,
    progress_service: ProgressServiceDep,
) -> MessageResponse:
    """Enroll a user in a course and create their lesson progress rows."""
    set_user_id(data.user_id)
    try:
        await progress_service.enroll_user(data.user_id, data.course_id)
    except CourselyError as e:
        raise handle_service_error(e) from e
    return MessageResponse(message="Enrolled successfully")


@router.post(
    "/unenroll",
    response_model=MessageResponse,
    summary="Unenroll from course",
    responses={400: {"description": "Missing field"}},
)
async def unenroll(
    data: EnrollRequest,
    progress_service: ProgressServiceDep,
) -> MessageResponse:
    """Remove an enrollment together with the user's progress in the course."""
    set_user_id(data.user_id)
    try:
        await progress_service.unenroll_user(data.user_id, data.course_id)
    except CourselyError as e:
        raise handle_service_error(e) from e
    return MessageResponse(message="Successfully unenrolled.")


@router.post(
    "/lesson-progress",
    response_model=MessageResponse,
    summary="Set lesson completion",
    responses={400: {"description": "Missing field"}},
)
async def set_lesson_progress(
    data: LessonCompletionRequest,
    progress_service: ProgressServiceDep,
) -> MessageResponse:
    """Mark a lesson complete or incomplete for a user."""
    set_user_id(data.user_id)
    try:
        await progress_service.set_lesson_completion(
            data.user_id, data.lesson_id, data.is_completed
        )
    except CourselyError as e:
        raise handle_service_error(e) from e
    return MessageResponse(message="Progress updated")


@router.get(
    "/progress/{user_id}",
    response_model=list[LessonProgressResponse],
    summary="Get user progress",
)
async def get_progress(
    user_id: int,
    progress_service: ProgressServiceDep,
) -> list[LessonProgressResponse]:
    """List completion and quiz score for every lesson of the user's courses."""
    set_user_id(user_id)
    try:
        progress = await progress_service.get_user_progress(user_id)
    except CourselyError as e:
        raise handle_service_error(e) from e
    return [LessonProgressResponse.from_entity(p) for p in progress]
