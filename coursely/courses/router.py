"""Course catalog API endpoints."""

from fastapi import APIRouter

from coursely.core.errors import CourselyError, handle_service_error

from .dependencies import CourseServiceDep
from .schemas import CourseResponse


router = APIRouter(prefix="/courses", tags=["courses"])


@router.get(
    "",
    response_model=list[CourseResponse],
    summary="List courses with lessons",
)
async def list_courses(course_service: CourseServiceDep) -> list[CourseResponse]:
    """Return all courses, each with its lessons."""
    try:
        courses = await course_service.list_courses()
    except CourselyError as e:
        raise handle_service_error(e) from e
    return [CourseResponse.from_entity(course) for course in courses]
