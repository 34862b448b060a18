"""Comment model definition."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from bugtracker.database import Base


class Comment(Base):
    """Comment model for bug discussions."""

    __tablename__ = "comments"

    comment_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Bug reference; comments are removed explicitly when their bug is deleted
    bug_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("bugs.bug_id"),
        nullable=False,
        index=True,
    )

    # Author reference
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id"),
        nullable=False,
        index=True,
    )

    comment_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Server-assigned, never updated
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Comment(comment_id={self.comment_id}, bug_id={self.bug_id}, user_id={self.user_id})>"
