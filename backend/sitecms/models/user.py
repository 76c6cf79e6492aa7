"""
SiteCMS Backend: User SQLAlchemy Model
=======================================

What:  ORM model for the `users` table (administrator and editor accounts).
Who:   Used by UserRepository, the authenticator and the seed loader.

Table Design:
    - id:        INTEGER PRIMARY KEY AUTOINCREMENT; ids are never reused
    - username:  UNIQUE; collisions surface as IntegrityError on flush/execute
    - password:  opaque string, stored and compared verbatim (no hashing)
    - role:      free text, "admin" or "editor" by convention; added to
                 existing data files by the schema manager when missing
"""

from typing import Optional

from sqlalchemy import Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from sitecms.database import Base

DEFAULT_ROLE = "editor"
ADMIN_ROLE = "admin"


class User(Base):
    """A CMS account. Exactly one row named "admin" always holds the admin role."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[Optional[str]] = mapped_column(Text, unique=True)
    password: Mapped[Optional[str]] = mapped_column(Text)
    name: Mapped[Optional[str]] = mapped_column(Text)
    role: Mapped[Optional[str]] = mapped_column(
        Text,
        default=DEFAULT_ROLE,
        server_default=text(f"'{DEFAULT_ROLE}'"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
