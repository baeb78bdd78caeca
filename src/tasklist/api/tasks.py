"""Task API routes.

Learn: Routes translate HTTP to TaskService calls. The service is built
per request for the authenticated caller, so a handler has no way to
touch another user's tasks. Not found and not yours both return 404
with the same body.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.auth.dependencies import CurrentIdentity, get_current_user
from tasklist.db.engine import get_db
from tasklist.schemas.task import TaskCreate, TaskRead, TaskUpdate
from tasklist.services.task_service import TaskService

router = APIRouter(prefix="/tasks")


def _task_svc(
    identity: CurrentIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TaskService:
    return TaskService(db, owner_id=identity.user_id)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Task not found")


@router.post("", response_model=TaskRead, status_code=201)
async def create_task(body: TaskCreate, svc: TaskService = Depends(_task_svc)):
    """Create a new task in 'pending' status."""
    return await svc.create_task(title=body.title, description=body.description)


@router.get("", response_model=list[TaskRead])
async def list_tasks(svc: TaskService = Depends(_task_svc)):
    """List the caller's tasks, newest first."""
    return await svc.list_tasks()


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(task_id: uuid.UUID, svc: TaskService = Depends(_task_svc)):
    task = await svc.get_task(task_id)
    if not task:
        raise _not_found()
    return task


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: uuid.UUID,
    body: TaskUpdate,
    svc: TaskService = Depends(_task_svc),
):
    """Update title, description and/or status. Omitted fields are kept."""
    task = await svc.update_task(
        task_id=task_id,
        title=body.title,
        description=body.description,
        status=body.status,
    )
    if not task:
        raise _not_found()
    return task


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: uuid.UUID, svc: TaskService = Depends(_task_svc)):
    if not await svc.delete_task(task_id):
        raise _not_found()
    return Response(status_code=204)
