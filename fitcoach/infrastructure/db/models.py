# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import uuid
from datetime import UTC, datetime

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitcoach.domain.users.entities import Role
from fitcoach.domain.workouts.entities import AssignmentStatus
from fitcoach.infrastructure.db.session import Base
from fitcoach.infrastructure.db.types import UtcDateTime


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(254), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(256))
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="user_role", native_enum=False, length=16),
        default=Role.CLIENT,
    )
    created_at: Mapped[datetime] = mapped_column(UtcDateTime(), default=_utcnow)

    workouts: Mapped[list["Workout"]] = relationship(
        "Workout", back_populates="trainer", cascade="all,delete", passive_deletes=True
    )
    assignments: Mapped[list["WorkoutAssignment"]] = relationship(
        "WorkoutAssignment", back_populates="client", cascade="all,delete", passive_deletes=True
    )


class Workout(Base):
    __tablename__ = "workouts"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    trainer_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), default=_utcnow, index=True
    )

    trainer: Mapped["User"] = relationship("User", back_populates="workouts")
    assignments: Mapped[list["WorkoutAssignment"]] = relationship(
        "WorkoutAssignment", back_populates="workout", cascade="all,delete", passive_deletes=True
    )


class WorkoutAssignment(Base):
    __tablename__ = "workout_assignments"
    __table_args__ = (UniqueConstraint("workout_id", "client_id", name="u_workout_client"),)
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    workout_id: Mapped[str] = mapped_column(
        ForeignKey("workouts.id", ondelete="CASCADE"), index=True
    )
    client_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    status: Mapped[AssignmentStatus] = mapped_column(
        SAEnum(AssignmentStatus, name="assignment_status", native_enum=False, length=16),
        default=AssignmentStatus.PENDING,
    )
    assigned_date: Mapped[datetime] = mapped_column(
        UtcDateTime(), default=_utcnow, index=True
    )

    workout: Mapped["Workout"] = relationship("Workout", back_populates="assignments")
    client: Mapped["User"] = relationship("User", back_populates="assignments")
