"""Quiz API endpoints."""

from fastapi import APIRouter

from coursely.core.context import set_user_id
from coursely.core.errors import CourselyError, handle_service_error

from .dependencies import QuizServiceDep
from .schemas import QuestionResponse, QuizResultResponse, QuizSubmitRequest


router = APIRouter(prefix="/quiz", tags=["quizzes"])


@router.post(
    "/submit",
    response_model=QuizResultResponse,
    summary="Submit quiz answers",
    responses={400: {"description": "No gradable answers"}},
)
async def submit_quiz(
    data: QuizSubmitRequest,
    quiz_service: QuizServiceDep,
) -> QuizResultResponse:
    """Grade the answers and record the score on the user's lesson progress."""
    set_user_id(data.user_id)
    try:
        result = await quiz_service.submit_quiz(data.user_id, data.lesson_id, data.answers)
    except CourselyError as e:
        raise handle_service_error(e) from e
    return QuizResultResponse.from_result(result)


@router.get(
    "/{lesson_id}",
    response_model=list[QuestionResponse],
    summary="Get lesson quiz",
)
async def get_quiz(
    lesson_id: int,
    quiz_service: QuizServiceDep,
) -> list[QuestionResponse]:
    """List the lesson's questions and options, without the correct answers."""
    try:
        questions = await quiz_service.get_quiz(lesson_id)
    except CourselyError as e:
        raise handle_service_error(e) from e
    return [QuestionResponse.from_entity(q) for q in questions]
