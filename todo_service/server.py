"""HTTP transport for the todo service.

Exposes the three service operations as Connect-style unary JSON procedures:

    POST /todo.v1.TodoService/AddTask     {"text": "..."}  -> {"task": {...}}
    POST /todo.v1.TodoService/GetTasks    {}               -> {"tasks": [...]}
    POST /todo.v1.TodoService/DeleteTask  {"id": "..."}    -> {"success": true}

Failures are rendered as {"code": "...", "message": "..."} with the HTTP
status of the error kind.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, ValidationError
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .config import DEFAULT_ALLOWED_ORIGINS
from .errors import InternalError, InvalidArgumentError, TodoError
from .models import (
    AddTaskRequest,
    AddTaskResponse,
    DeleteTaskRequest,
    DeleteTaskResponse,
    GetTasksRequest,
    GetTasksResponse,
)
from .service import TodoService

logger = logging.getLogger(__name__)

SERVICE_PATH = "/todo.v1.TodoService"

CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOWED_HEADERS = [
    "Accept",
    "Content-Type",
    "Content-Length",
    "Connect-Protocol-Version",
]


def create_error_response(error: TodoError) -> JSONResponse:
    """Render a service error as a Connect error envelope."""
    return JSONResponse(error.to_dict(), status_code=error.http_status)


async def parse_request(request: Request, model: type[BaseModel]) -> BaseModel:
    """Parse a request body into a model.

    An empty body (or a GET) is treated as an empty message.

    Raises:
        InvalidArgumentError: If the body is not a JSON object matching the model.
    """
    raw = b"" if request.method == "GET" else await request.body()
    if not raw.strip():
        body: Any = {}
    else:
        try:
            body = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError):
            raise InvalidArgumentError("invalid JSON body") from None

    if not isinstance(body, dict):
        raise InvalidArgumentError("request body must be a JSON object")

    try:
        return model.model_validate(body)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidArgumentError(f"invalid field: {fields}") from None


class TodoServer:
    """Starlette front end for a TodoService."""

    def __init__(
        self,
        service: Optional[TodoService] = None,
        allowed_origins: Optional[list[str]] = None,
    ):
        self.service = service if service is not None else TodoService()
        self.allowed_origins = (
            allowed_origins if allowed_origins is not None else list(DEFAULT_ALLOWED_ORIGINS)
        )

    async def _dispatch(
        self, request: Request, handler: Callable[[Request], Awaitable[BaseModel]]
    ) -> Response:
        """Run a procedure handler and render its result or failure."""
        try:
            result = await handler(request)
        except TodoError as e:
            if isinstance(e, InternalError):
                logger.error(f"{request.url.path} failed: {e.message}")
            else:
                logger.info(f"{request.url.path} rejected: {e.code}: {e.message}")
            return create_error_response(e)
        except Exception:
            logger.exception(f"Unhandled error in {request.url.path}")
            return create_error_response(InternalError("internal error"))
        return JSONResponse(result.model_dump(by_alias=True))

    async def _add_task(self, request: Request) -> AddTaskResponse:
        msg = await parse_request(request, AddTaskRequest)
        task = await run_in_threadpool(self.service.add_task, msg.text)
        return AddTaskResponse(task=task)

    async def _get_tasks(self, request: Request) -> GetTasksResponse:
        await parse_request(request, GetTasksRequest)
        tasks = await run_in_threadpool(self.service.get_tasks)
        return GetTasksResponse(tasks=tasks)

    async def _delete_task(self, request: Request) -> DeleteTaskResponse:
        msg = await parse_request(request, DeleteTaskRequest)
        success = await run_in_threadpool(self.service.delete_task, msg.id)
        return DeleteTaskResponse(success=success)

    async def handle_add_task(self, request: Request) -> Response:
        return await self._dispatch(request, self._add_task)

    async def handle_get_tasks(self, request: Request) -> Response:
        return await self._dispatch(request, self._get_tasks)

    async def handle_delete_task(self, request: Request) -> Response:
        return await self._dispatch(request, self._delete_task)

    async def handle_health(self, request: Request) -> Response:
        """Liveness probe with the current task count."""
        count = await run_in_threadpool(len, self.service.store)
        return JSONResponse({"status": "ok", "tasks": count})

    def create_app(self) -> Starlette:
        """Create the Starlette application."""
        routes = [
            Route(f"{SERVICE_PATH}/AddTask", self.handle_add_task, methods=["POST"]),
            Route(f"{SERVICE_PATH}/GetTasks", self.handle_get_tasks, methods=["GET", "POST"]),
            Route(f"{SERVICE_PATH}/DeleteTask", self.handle_delete_task, methods=["POST"]),
            Route("/healthz", self.handle_health, methods=["GET"]),
        ]
        middleware = [
            Middleware(
                CORSMiddleware,
                allow_origins=self.allowed_origins,
                allow_methods=CORS_ALLOWED_METHODS,
                allow_headers=CORS_ALLOWED_HEADERS,
                allow_credentials=True,
            )
        ]
        return Starlette(routes=routes, middleware=middleware)


def create_app(
    service: Optional[TodoService] = None,
    allowed_origins: Optional[list[str]] = None,
) -> Starlette:
    """Build an app around a service (a fresh in-memory one by default)."""
    return TodoServer(service, allowed_origins).create_app()


def run_server(
    host: str = "0.0.0.0",
    port: int = 8080,
    allowed_origins: Optional[list[str]] = None,
    log_level: str = "info",
):
    """Serve a fresh todo service until SIGINT/SIGTERM.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        allowed_origins: CORS origins allowed to call the API.
        log_level: uvicorn log level name.
    """
    import uvicorn

    app = create_app(allowed_origins=allowed_origins)
    logger.info(f"Starting todo service on http://{host}:{port}")
    logger.info(f"Allowed origins: {', '.join(allowed_origins or DEFAULT_ALLOWED_ORIGINS)}")
    uvicorn.run(app, host=host, port=port, log_level=log_level)
    logger.info("Todo service stopped")
