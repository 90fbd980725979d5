"""Solve endpoint relaying homework questions to DeepSeek.

Handles credential check, body parsing, question validation, and the
single upstream call.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from src.models.schemas import ErrorResponse, SolveRequest, SolveResponse
from src.relay.errors import InvalidRequestError
from src.relay.solver import SolverService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["solve"])

MISSING_QUESTION = "Please provide a question to solve."


def get_solver_service(request: Request) -> SolverService:
    """Build the solver from the configuration captured at startup.

    Args:
        request: The incoming request (gives access to app state).

    Returns:
        SolverService bound to the application's RelayConfig.
    """
    return SolverService(request.app.state.config)


async def _read_question(request: Request) -> str:
    """Parse the raw body and extract the trimmed question.

    The body is parsed by hand so malformed JSON maps to 400 with the
    parser message instead of FastAPI's 422.

    Args:
        request: The incoming request.

    Returns:
        The trimmed, non-empty question.

    Raises:
        InvalidRequestError: 400 if the body is not JSON or has no question.
    """
    raw = await request.body()

    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise InvalidRequestError("Invalid JSON body.", details=str(e)) from e

    if not isinstance(payload, dict):
        raise InvalidRequestError(MISSING_QUESTION)

    try:
        question = SolveRequest.model_validate(payload).question
    except ValidationError as e:
        raise InvalidRequestError(MISSING_QUESTION) from e

    if not question:
        raise InvalidRequestError(MISSING_QUESTION)

    return question


@router.post(
    "/solve",
    response_model=SolveResponse,
    response_model_exclude_unset=True,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def solve(
    request: Request,
    solver: SolverService = Depends(get_solver_service),
) -> SolveResponse:
    """Solve a homework question step by step.

    Accepts ``{"question": "..."}``, forwards it to DeepSeek with the
    tutoring prompt, and returns the trimmed answer.

    Args:
        request: Incoming request carrying the JSON body.
        solver: Solver bound to the startup configuration.

    Returns:
        SolveResponse with the answer and upstream usage.

    Raises:
        500: API key not configured.
        400: Invalid JSON or missing question.
        4xx/5xx: Upstream status passed through.
        502: Upstream returned no answer.
    """
    # Credential check comes first so nothing is parsed or sent without it
    solver.ensure_configured()

    question = await _read_question(request)

    return await solver.solve(question)
