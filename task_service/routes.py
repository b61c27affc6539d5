"""Task CRUD endpoints.

Handlers are plain functions, so FastAPI runs them on its threadpool; the
store they share does its own locking.
"""

from typing import Annotated
from uuid import UUID

import pydantic
from fastapi import APIRouter, Body, Depends, Request, Response, status
from loguru import logger

from task_service.errors import NotFoundError, ValidationError
from task_service.models import Task, TaskCreate, TaskUpdate
from task_service.store import TaskStore

TASKS_PREFIX = "/api/tasks"

# The update body is read raw, so describe it for the docs by hand.
_UPDATE_BODY_SCHEMA = {
    "requestBody": {
        "content": {"application/json": {"schema": TaskUpdate.model_json_schema(by_alias=True)}},
        "required": False,
    }
}


def task_location(task: Task) -> str:
    return f"{TASKS_PREFIX}/{task.id}"


async def read_raw_body(request: Request) -> bytes:
    """Request body bytes, left undecoded so the handler decides when to parse."""
    return await request.body()


def create_task_router(store: TaskStore) -> APIRouter:
    """Create the task API router bound to ``store``."""
    router = APIRouter(prefix=TASKS_PREFIX, tags=["Tasks"])

    @router.get("", response_model=list[Task], response_model_exclude_none=True)
    def list_tasks() -> list[Task]:
        """List all tasks, incomplete first, then by title."""
        return store.list_all()

    @router.post(
        "",
        response_model=Task,
        response_model_exclude_none=True,
        status_code=status.HTTP_201_CREATED,
    )
    def create_task(
        response: Response,
        data: Annotated[TaskCreate | None, Body()] = None,
    ) -> Task:
        """Create a new task."""
        # A missing or null body is a missing title.
        if data is None or not data.title:
            raise ValidationError("Title is required")
        task = store.create(data)
        response.headers["Location"] = task_location(task)
        logger.info("Created task {}", task.id)
        return task

    @router.get("/{task_id:uuid}", response_model=Task, response_model_exclude_none=True)
    def get_task(task_id: UUID) -> Task:
        """Get a specific task by ID."""
        task = store.get(task_id)
        if task is None:
            raise NotFoundError()
        return task

    @router.put(
        "/{task_id:uuid}",
        response_model=Task,
        response_model_exclude_none=True,
        openapi_extra=_UPDATE_BODY_SCHEMA,
    )
    def update_task(task_id: UUID, body: Annotated[bytes, Depends(read_raw_body)]) -> Task:
        """Update an existing task; only the supplied fields change."""
        # An unknown ID wins over a bad payload, so check before parsing.
        if store.get(task_id) is None:
            raise NotFoundError()
        try:
            data = TaskUpdate.model_validate_json(body.strip() or b"{}")
        except pydantic.ValidationError as exc:
            logger.warning("Rejected update for task {}: {}", task_id, exc.errors())
            raise ValidationError("Invalid request body") from exc
        if data.title is not None and not data.title:
            raise ValidationError("Title cannot be empty")

        # The task may have been deleted since the check above.
        task = store.update(task_id, data)
        if task is None:
            raise NotFoundError()
        return task

    @router.delete("/{task_id:uuid}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_task(task_id: UUID) -> None:
        """Delete a task."""
        if not store.delete(task_id):
            raise NotFoundError()
        logger.info("Deleted task {}", task_id)

    return router
