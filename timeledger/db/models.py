from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


# ── Membership ───────────────────────────────────────────────────────────────

app_members = Table(
    "app_members",
    Base.metadata,
    Column("app_id", ForeignKey("apps.id"), primary_key=True),
    Column("contributor_id", ForeignKey("contributors.id"), primary_key=True),
)


# ── Models ───────────────────────────────────────────────────────────────────


class Contributor(Base):
    __tablename__ = "contributors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    identity: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)  # Slack ID
    handle: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)

    apps: Mapped[list["App"]] = relationship(secondary=app_members, back_populates="members")
    projects: Mapped[list["ProviderProject"]] = relationship(back_populates="contributor")


class App(Base):
    __tablename__ = "apps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)

    members: Mapped[list["Contributor"]] = relationship(
        secondary=app_members, back_populates="apps"
    )
    projects: Mapped[list["ProviderProject"]] = relationship(back_populates="app")


class ProviderProject(Base):
    """A Hackatime project a contributor tracks time under for one app."""

    __tablename__ = "provider_projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contributor_id: Mapped[int] = mapped_column(ForeignKey("contributors.id"))
    app_id: Mapped[int] = mapped_column(ForeignKey("apps.id"))
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    github_link: Mapped[str | None] = mapped_column(String(500), nullable=True)

    contributor: Mapped["Contributor"] = relationship(back_populates="projects")
    app: Mapped["App"] = relationship(back_populates="projects")


class Devlog(Base):
    __tablename__ = "devlogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contributor_id: Mapped[int] = mapped_column(ForeignKey("contributors.id"))
    app_id: Mapped[int] = mapped_column(ForeignKey("apps.id"))

    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    review_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    approved_hours: Mapped[float | None] = mapped_column(Float, nullable=True)


class ShipRelease(Base):
    __tablename__ = "ship_releases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contributor_id: Mapped[int] = mapped_column(ForeignKey("contributors.id"))
    app_id: Mapped[int] = mapped_column(ForeignKey("apps.id"))

    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    change_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    code_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    playable_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
