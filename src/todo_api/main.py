from datetime import datetime
from typing import Callable, Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .filters import DEFAULT_CREATE_FILTERS, TodoFilter, ValidationFailure, utc_now
from .middleware import LegacyPathMiddleware, RequestLoggingMiddleware
from .repositories import InMemoryTodoStore, TodoStore, seed_todos
from .routers import todos as todos_router
from .settings import Settings, get_settings

openapi_tags = [
    {"name": "greeting", "description": "Service greeting."},
    {"name": "todos", "description": "Create, list, fetch and delete Todo items."},
]

VALIDATION_PROBLEM_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.5.1"


async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    """
    Render a failed creation filter as a problem-details document.

    Response format:
        {
            "type": "https://tools.ietf.org/html/rfc9110#section-15.5.1",
            "title": "One or more validation errors occurred.",
            "status": 400,
            "errors": {"DueDate": [...], "Name": [...]}
        }
    """
    return JSONResponse(
        status_code=400,
        media_type="application/problem+json",
        content={
            "type": VALIDATION_PROBLEM_TYPE,
            "title": "One or more validation errors occurred.",
            "status": 400,
            "errors": exc.errors,
        },
    )


async def malformed_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for bodies or path parameters that cannot be parsed.

    Response format:
        {
            "error": "MalformedRequest",
            "message": "Request could not be parsed",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    return JSONResponse(
        status_code=400,
        content={
            "error": "MalformedRequest",
            "message": "Request could not be parsed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# PUBLIC_INTERFACE
def hello() -> PlainTextResponse:
    """
    Greeting endpoint.

    Returns:
        The plain-text greeting "Hello World!".
    """
    return PlainTextResponse("Hello World!")


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[Settings] = None,
    store: Optional[TodoStore] = None,
    clock: Optional[Callable[[], datetime]] = None,
    create_filters: Sequence[TodoFilter] = DEFAULT_CREATE_FILTERS,
) -> FastAPI:
    """
    Build the Todo API application.

    Args:
        settings: Configuration; read from the environment when omitted.
        store: Todo storage; a fresh in-memory store (seeded per settings) when omitted.
        clock: Returns the current time used by the creation filters and seeding.
        create_filters: Ordered filters run against every new todo before it is stored.

    Returns:
        A FastAPI app whose middleware runs, outermost first: request logging,
        legacy /tasks path mapping, CORS.
    """
    settings = settings or get_settings()
    clock = clock or utc_now
    if store is None:
        store = InMemoryTodoStore(seed_todos(clock()) if settings.seed_todos else None)

    app = FastAPI(
        title="Todo API",
        description="Minimal in-memory Todo service with request validation and request logging.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.clock = clock
    app.state.create_filters = tuple(create_filters)

    app.add_exception_handler(ValidationFailure, validation_failure_handler)
    app.add_exception_handler(RequestValidationError, malformed_request_handler)

    app.add_api_route(
        "/",
        hello,
        methods=["GET"],
        summary="Greeting",
        tags=["greeting"],
        response_class=PlainTextResponse,
    )
    app.include_router(todos_router.router)

    # Last added runs first.
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LegacyPathMiddleware, mode=settings.legacy_path_mode)
    app.add_middleware(RequestLoggingMiddleware)

    return app


app = create_app()
