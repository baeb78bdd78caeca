"""Task service — CRUD on one user's tasks.

Learn: A TaskService is bound to a single owner at construction, and
every query it runs filters on Task.user_id == owner_id. There is no
method that reaches another user's rows, so "not yours" and "doesn't
exist" both come back as None/False and the route answers 404 for both.
"""

import uuid
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.db.models import Task, utcnow


class TaskService:
    """Business logic for task CRUD, scoped to one owner."""

    def __init__(self, db: AsyncSession, owner_id: uuid.UUID):
        self.db = db
        self.owner_id = owner_id

    # ─── Create ──────────────────────────────────────────

    async def create_task(self, title: str, description: str = "") -> Task:
        """Create a new task in 'pending' status."""
        task = Task(
            user_id=self.owner_id,
            title=title,
            description=description,
            status="pending",
        )
        self.db.add(task)
        await self.db.commit()
        return task

    # ─── Read ────────────────────────────────────────────

    async def get_task(self, task_id: uuid.UUID) -> Optional[Task]:
        result = await self.db.execute(
            select(Task).where(Task.id == task_id, Task.user_id == self.owner_id)
        )
        return result.scalars().first()

    async def list_tasks(self) -> list[Task]:
        """All of the owner's tasks, newest first."""
        result = await self.db.execute(
            select(Task)
            .where(Task.user_id == self.owner_id)
            .order_by(Task.created_at.desc())
        )
        return list(result.scalars().all())

    # ─── Update ──────────────────────────────────────────

    async def update_task(
        self,
        task_id: uuid.UUID,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Optional[Task]:
        """Apply the given fields. Returns None if the owner has no such task."""
        task = await self.get_task(task_id)
        if not task:
            return None

        if title is not None:
            task.title = title
        if description is not None:
            task.description = description
        if status is not None:
            task.status = status
        task.updated_at = utcnow()

        await self.db.commit()
        return task

    # ─── Delete ──────────────────────────────────────────

    async def delete_task(self, task_id: uuid.UUID) -> bool:
        """Delete a task. False if the owner has no such task."""
        result = await self.db.execute(
            delete(Task).where(Task.id == task_id, Task.user_id == self.owner_id)
        )
        await self.db.commit()
        return result.rowcount > 0
