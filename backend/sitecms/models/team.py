"""
SiteCMS Backend: Team Member SQLAlchemy Model
==============================================

What:  ORM model for the `team` table.

    - image:  absolute URL or "/uploads/<name>" of the portrait
    - icon:   optional client-side icon name; added to existing data
              files by the schema manager
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from sitecms.database import Base


class TeamMember(Base):
    __tablename__ = "team"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(Text)
    title: Mapped[Optional[str]] = mapped_column(Text)
    image: Mapped[Optional[str]] = mapped_column(Text)
    icon: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<TeamMember(id={self.id}, name='{self.name}')>"
