"""
TASKNEST API - Demo Data

Usage: python -m tasknest.seed

Creates a demo account with a few sample tasks. Does nothing if the demo
account already exists.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import asyncio
import logging

from tasknest.auth.passwords import hash_password
from tasknest.database import database
from tasknest.tasks.enums import TaskPriority, TaskStatus
from tasknest.tasks.models import Task
from tasknest.tasks.repository import TaskRepository, TaskRepositoryInterface
from tasknest.users.models import User
from tasknest.users.repository import MongoUserRepository, UserRepositoryInterface

logger = logging.getLogger(__name__)


DEMO_NAME = "Alex Rivera"
DEMO_EMAIL = "alex@example.com"
DEMO_PASSWORD = "Password123!"


async def seed(
    user_repository: UserRepositoryInterface,
    task_repository: TaskRepositoryInterface,
) -> Optional[User]:
    """Insert the demo user and tasks. Returns the new user, or None if already seeded."""
    if await user_repository.exists_by_email(DEMO_EMAIL):
        logger.info(f"Demo user {DEMO_EMAIL} already exists, skipping seed")
        return None

    user = User.create(name=DEMO_NAME, email=DEMO_EMAIL, password_hash=hash_password(DEMO_PASSWORD))
    await user_repository.create(user)

    now = datetime.now(timezone.utc)
    tasks = [
        Task.create(
            user_id=user.id,
            title="Plan weekly sprint",
            description="Outline goals, deliverables, and risks for the team sprint.",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            tags=["planning", "team"],
            due_date=now + timedelta(days=3),
        ),
        Task.create(
            user_id=user.id,
            title="Write product update",
            description="Draft the monthly product update for stakeholders.",
            priority=TaskPriority.MEDIUM,
            tags=["writing", "stakeholders"],
            due_date=now + timedelta(days=7),
            is_private=True,
        ),
        Task.create(
            user_id=user.id,
            title="Archive completed tickets",
            description="Close out completed tasks in the tracker.",
            status=TaskStatus.DONE,
            priority=TaskPriority.LOW,
            tags=["cleanup"],
        ),
    ]
    tasks[2].completed_at = now - timedelta(days=2)

    for task in tasks:
        await task_repository.create(task)

    logger.info(f"Seeded demo user {DEMO_EMAIL} with {len(tasks)} tasks")
    return user


async def main() -> None:
    await database.connect()
    try:
        db = database.get_database()
        await seed(MongoUserRepository(db), TaskRepository(db))
    finally:
        await database.disconnect()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    asyncio.run(main())
