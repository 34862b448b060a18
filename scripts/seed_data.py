#!/usr/bin/env python
"""
Seed data script for development and testing.

Usage:
    python scripts/seed_data.py

This script creates any missing tables, then:
- Sample manager and developer users
- Sample projects
- Sample bugs with various statuses
- Sample comments
"""

import asyncio

from bugtracker.core.security import hash_password
from bugtracker.database import close_db, create_tables, get_gateway
from bugtracker.models.bug import BugPriority, BugStatus
from bugtracker.models.user import UserRole
from bugtracker.repositories import (
    BugRepository,
    CommentRepository,
    ProjectRepository,
    UserRepository,
)


# Seed data
USERS = [
    {
        "username": "admin",
        "email": "admin@example.com",
        "password": "AdminPass123!",
        "role": UserRole.ADMIN,
    },
    {
        "username": "manager1",
        "email": "manager1@example.com",
        "password": "ManagerPass123!",
        "role": UserRole.MANAGER,
    },
    {
        "username": "dev1",
        "email": "dev1@example.com",
        "password": "DevPass123!",
        "role": UserRole.DEVELOPER,
    },
    {
        "username": "dev2",
        "email": "dev2@example.com",
        "password": "DevPass123!",
        "role": UserRole.DEVELOPER,
    },
]

PROJECTS = [
    {
        "project_name": "Bug Tracker API",
        "description": "Internal bug tracking system API for development teams.",
    },
    {
        "project_name": "Mobile App",
        "description": "Cross-platform mobile application for iOS and Android.",
    },
]

BUGS = [
    {
        "title": "Login fails with special characters in password",
        "description": "Passwords containing `<` or `>` are rejected at login.",
        "status": BugStatus.OPEN,
        "priority": BugPriority.HIGH,
    },
    {
        "title": "Project list is slow for large datasets",
        "description": "The projects endpoint takes seconds to respond with many rows.",
        "status": BugStatus.IN_PROGRESS,
        "priority": BugPriority.MEDIUM,
    },
    {
        "title": "Mobile app crashes on startup",
        "description": "The app crashes immediately after launch on some devices.",
        "status": BugStatus.REOPENED,
        "priority": BugPriority.CRITICAL,
    },
    {
        "title": "Add dark mode support",
        "description": None,
        "status": BugStatus.CLOSED,
        "priority": BugPriority.LOW,
    },
]

COMMENTS = [
    "I can reproduce this issue. Looking into it now.",
    "This seems to be related to the recent deployment.",
    "Fixed in the latest commit. Please review the PR.",
    "Confirmed working after the fix.",
]


async def seed_database() -> None:
    """Seed the database with sample data."""
    print("Creating tables...")
    await create_tables()

    gateway = get_gateway()
    if await UserRepository(gateway).get_all():
        print("Database already seeded. Skipping...")
        return

    async with gateway.transaction() as tx:
        print("Creating users...")
        users = {}
        for user_data in USERS:
            users[user_data["username"]] = await UserRepository(tx).create(
                {
                    "username": user_data["username"],
                    "email": user_data["email"],
                    "password_hash": hash_password(user_data["password"]),
                    "role": user_data["role"],
                }
            )

        print("Creating projects...")
        projects = []
        for project_data in PROJECTS:
            projects.append(
                await ProjectRepository(tx).create(
                    {**project_data, "created_by": users["manager1"].user_id}
                )
            )

        print("Creating bugs...")
        developers = [users["dev1"], users["dev2"]]
        bugs = []
        for i, bug_data in enumerate(BUGS):
            assignee = developers[(i + 1) % len(developers)] if i % 2 == 0 else None
            bugs.append(
                await BugRepository(tx).create(
                    {
                        **bug_data,
                        "project_id": projects[i % len(projects)].project_id,
                        "reported_by": developers[i % len(developers)].user_id,
                        "assigned_to": assignee.user_id if assignee else None,
                    }
                )
            )

        print("Creating comments...")
        all_users = list(users.values())
        for i, bug in enumerate(bugs):
            # Add 1-2 comments per bug
            for j in range((i % 2) + 1):
                await CommentRepository(tx).create(
                    {
                        "bug_id": bug.bug_id,
                        "user_id": all_users[(i + j) % len(all_users)].user_id,
                        "comment_text": COMMENTS[(i + j) % len(COMMENTS)],
                    }
                )

    print("\n" + "=" * 50)
    print("Database seeded successfully!")
    print("=" * 50)
    print("\nDefault credentials:")
    print("  Admin:     admin / AdminPass123!")
    print("  Manager:   manager1 / ManagerPass123!")
    print("  Developer: dev1 / DevPass123!")


async def main() -> None:
    try:
        await seed_database()
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
