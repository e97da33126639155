"""Async HTTP client for a running todo service."""

from __future__ import annotations

from typing import Any

import httpx

from .errors import ERRORS_BY_CODE, TodoError
from .models import AddTaskResponse, DeleteTaskResponse, GetTasksResponse, Task
from .server import SERVICE_PATH


class TodoClient:
    """Client for the todo service's Connect JSON API.

    Usage:
        async with TodoClient("http://localhost:8080") as client:
            task = await client.add_task("Buy milk")
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> TodoClient:
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    async def _call(self, method: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST a unary call and return the decoded response message.

        Raises:
            TodoError: The matching subclass for the server's error code.
        """
        response = await self.client.post(
            f"{SERVICE_PATH}/{method}",
            json=body,
            headers={"Content-Type": "application/json"},
        )
        if response.is_success:
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        code = payload.get("code", "") if isinstance(payload, dict) else ""
        message = payload.get("message", "") if isinstance(payload, dict) else ""
        error_cls = ERRORS_BY_CODE.get(code)
        if error_cls is not None:
            raise error_cls(message)
        error = TodoError(message or f"HTTP {response.status_code}")
        error.code = code or "unknown"
        error.http_status = response.status_code
        raise error

    async def add_task(self, text: str) -> Task:
        data = await self._call("AddTask", {"text": text})
        return AddTaskResponse.model_validate(data).task

    async def get_tasks(self) -> list[Task]:
        data = await self._call("GetTasks", {})
        return GetTasksResponse.model_validate(data).tasks

    async def delete_task(self, task_id: str) -> bool:
        data = await self._call("DeleteTask", {"id": task_id})
        return DeleteTaskResponse.model_validate(data).success
