"""Tests for the async HTTP client against an in-process app."""

import httpx
import pytest

from todo_service.client import TodoClient
from todo_service.errors import InvalidArgumentError, NotFoundError, TodoError
from todo_service.server import create_app
from todo_service.service import TodoService


def asgi_client(service: TodoService) -> TodoClient:
    transport = httpx.ASGITransport(app=create_app(service))
    return TodoClient("http://testserver", transport=transport)


class TestTodoClient:
    """Test client calls and error mapping."""

    @pytest.mark.asyncio
    async def test_add_get_delete(self, service):
        async with asgi_client(service) as client:
            task = await client.add_task("  Buy milk ")
            assert task.text == "Buy milk"

            tasks = await client.get_tasks()
            assert [t.id for t in tasks] == [task.id]

            assert await client.delete_task(task.id) is True
            assert await client.get_tasks() == []

    @pytest.mark.asyncio
    async def test_invalid_argument(self, service):
        async with asgi_client(service) as client:
            with pytest.raises(InvalidArgumentError, match="text empty"):
                await client.add_task("")

    @pytest.mark.asyncio
    async def test_not_found(self, service):
        async with asgi_client(service) as client:
            with pytest.raises(NotFoundError, match="task not found"):
                await client.delete_task("nonexistent")

    @pytest.mark.asyncio
    async def test_unknown_error_code(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"code": "unavailable", "message": "down"})

        client = TodoClient("http://testserver", transport=httpx.MockTransport(handler))
        async with client:
            with pytest.raises(TodoError) as exc_info:
                await client.get_tasks()

        assert exc_info.value.code == "unavailable"
        assert exc_info.value.http_status == 503
        assert exc_info.value.message == "down"

    @pytest.mark.asyncio
    async def test_non_json_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        async with TodoClient("http://testserver", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TodoError) as exc_info:
                await client.get_tasks()

        assert exc_info.value.http_status == 502

    def test_requires_context_manager(self):
        client = TodoClient()
        with pytest.raises(RuntimeError):
            _ = client.client
