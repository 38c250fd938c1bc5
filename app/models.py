from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class VersionedMixin:
    """
    Optimistic concurrency column.

    Writers must supply the version they read; see
    ``app.services.versioning`` for the conditional UPDATE/DELETE that
    enforces it.
    """

    version: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)


# ---------------------------------------------------------------------------
# UserRole
# ---------------------------------------------------------------------------
class UserRole(Base):
    __tablename__ = "user_roles"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    users: Mapped[List["User"]] = relationship(
        "User", back_populates="user_role", lazy="noload"
    )


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class User(VersionedMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    second_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    display_name: Mapped[str] = mapped_column(String(310), nullable=False, index=True)
    user_role_name: Mapped[Optional[str]] = mapped_column(
        String(50), ForeignKey("user_roles.name"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )

    # Relationships: lazy="noload", services eager-load explicitly
    user_role: Mapped[Optional["UserRole"]] = relationship(
        "UserRole", back_populates="users", lazy="noload"
    )
    sessions: Mapped[List["Session"]] = relationship(
        "Session", back_populates="user", lazy="noload"
    )


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
class Session(Base):
    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # No ON DELETE CASCADE: user deletion removes sessions explicitly in
    # the same transaction.
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="sessions", lazy="noload")


# ---------------------------------------------------------------------------
# City
# ---------------------------------------------------------------------------
class City(VersionedMixin, Base):
    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    city_name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False, index=True)


# ---------------------------------------------------------------------------
# SocialStatus
# ---------------------------------------------------------------------------
class SocialStatus(VersionedMixin, Base):
    __tablename__ = "social_statuses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    social_status_name: Mapped[str] = mapped_column(
        String(150), unique=True, nullable=False, index=True
    )


# ---------------------------------------------------------------------------
# Customer
# ---------------------------------------------------------------------------
class Customer(VersionedMixin, Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    second_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    display_name: Mapped[str] = mapped_column(String(310), nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )

    city_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("cities.id"), nullable=True, index=True
    )
    social_status_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("social_statuses.id"), nullable=True, index=True
    )

    city: Mapped[Optional["City"]] = relationship("City", lazy="noload")
    social_status: Mapped[Optional["SocialStatus"]] = relationship("SocialStatus", lazy="noload")
