"""
SiteCMS Backend: Service SQLAlchemy Model
==========================================

What:  ORM model for the `services` table (practice areas shown on the site).

    - icon:      name of a client-side icon component (e.g. "Leaf")
    - file_url:  optional "/uploads/<name>" link set after an upload;
                 added to existing data files by the schema manager
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from sitecms.database import Base


class Service(Base):
    __tablename__ = "services"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text)
    icon: Mapped[Optional[str]] = mapped_column(Text)
    file_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, title='{self.title}')>"
