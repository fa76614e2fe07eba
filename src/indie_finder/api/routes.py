"""HTTP routes of the game discovery API.

Every handler answers with the upstream payload on success. Failures are
logged through the error handling service and answered with a static
message only: upstream status codes and bodies never reach the caller.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..context import ApplicationContext
from ..services.errors import ErrorCategory
from .params import parse_filter

router = APIRouter()


def get_context(request: Request) -> ApplicationContext:
    return request.app.state.context


def _failure(
    context: ApplicationContext,
    request: Request,
    error: Exception,
    message: str,
    operation: str,
) -> JSONResponse:
    friendly = context.error_service.handle_error(
        error,
        operation=operation,
        component="api",
        context={"path": request.url.path, "query": str(request.query_params)},
    )

    if friendly.category is ErrorCategory.NOT_FOUND:
        return JSONResponse(status_code=404, content={"message": friendly.message})

    status_code = 500
    if friendly.category is ErrorCategory.VALIDATION and context.config.validation_errors_as_client_errors:
        status_code = 400
    return JSONResponse(status_code=status_code, content={"message": message})


@router.get("/games")
async def list_games(request: Request, context: ApplicationContext = Depends(get_context)) -> Any:
    try:
        game_filter = parse_filter(request.query_params)
        return await context.catalog.list_games(game_filter)
    except Exception as e:
        return _failure(context, request, e, "Failed to fetch games", "list_games")


# Declared before /games/{game_id} so "random" is not taken for an id
@router.get("/games/random")
async def random_game(request: Request, context: ApplicationContext = Depends(get_context)) -> Any:
    try:
        game_filter = parse_filter(request.query_params, list_options=False)
        return await context.catalog.random_game(game_filter)
    except Exception as e:
        return _failure(context, request, e, "Failed to get random game", "random_game")


@router.get("/games/{game_id}")
async def get_game(game_id: str, request: Request, context: ApplicationContext = Depends(get_context)) -> Any:
    try:
        return await context.catalog.get_game(game_id)
    except Exception as e:
        return _failure(context, request, e, "Failed to fetch game details", "get_game")


@router.get("/games/{game_id}/similar")
async def similar_games(game_id: str, request: Request, context: ApplicationContext = Depends(get_context)) -> Any:
    try:
        return await context.catalog.similar_games(game_id)
    except Exception as e:
        return _failure(context, request, e, "Failed to fetch similar games", "similar_games")


@router.get("/genres")
async def list_genres(request: Request, context: ApplicationContext = Depends(get_context)) -> Any:
    try:
        return await context.catalog.list_genres()
    except Exception as e:
        return _failure(context, request, e, "Failed to fetch genres", "list_genres")


@router.get("/platforms")
async def list_platforms(request: Request, context: ApplicationContext = Depends(get_context)) -> Any:
    try:
        return await context.catalog.list_platforms()
    except Exception as e:
        return _failure(context, request, e, "Failed to fetch platforms", "list_platforms")
