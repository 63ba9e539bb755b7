"""Deadline Domain Model -- a tracked legal task (prazo)

history is append-only and filled in by the backend; this package only reads it.
Urgency is never stored here: it is recomputed from due_date/status/classification
at render time (see prazos.core.urgency).
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import Classification, DeadlineStatus


class ActingUser(BaseModel):
    """User reference embedded in a history entry"""

    name: str = Field(description="Display name")


class HistoryItem(BaseModel):
    """Single change record"""

    id: str = Field(description="History entry ID")
    action_description: str = Field(description="What changed")
    acting_user: ActingUser = Field(description="Who changed it")
    created_at: datetime = Field(description="When it changed")


class ResponsibleRef(BaseModel):
    """Responsible user reference as embedded by the backend"""

    id: str = Field(description="User ID")
    name: str = Field(description="User name")


class Deadline(BaseModel):
    """Deadline data model

    classification is an editorial tag chosen by a user and is independent of
    the computed urgency.
    """

    id: str = Field(description="Unique identifier")
    task_description: str = Field(description="Task description")
    due_date: datetime = Field(description="Due timestamp")
    process_number: str | None = Field(default=None, description="Court process number")
    type: str | None = Field(default=None, description="Deadline type (Recurso, Agravo, ...)")
    parties: str | None = Field(default=None, description="Parties involved")
    status: DeadlineStatus = Field(default=DeadlineStatus.PENDING, description="Lifecycle state")
    classification: Classification = Field(
        default=Classification.NORMAL,
        description="Stored severity tag",
    )
    responsible_user_id: str | None = Field(default=None, description="Assigned user ID")
    responsible: ResponsibleRef | None = Field(default=None, description="Assigned user reference")
    history: list[HistoryItem] = Field(default_factory=list, description="Change history")
    created_at: datetime = Field(description="Creation time")
    updated_at: datetime | None = Field(default=None, description="Last update time")


class DeadlineCreate(BaseModel):
    """Payload for creating a deadline"""

    task_description: str = Field(min_length=1, description="Task description")
    due_date: datetime = Field(description="Due timestamp")
    process_number: str | None = Field(default=None, description="Court process number")
    type: str | None = Field(default=None, description="Deadline type")
    parties: str | None = Field(default=None, description="Parties involved")
    status: DeadlineStatus = Field(default=DeadlineStatus.PENDING, description="Lifecycle state")
    classification: Classification = Field(
        default=Classification.NORMAL,
        description="Stored severity tag",
    )
    responsible_user_id: str | None = Field(default=None, description="Assigned user ID")


class DeadlineUpdate(BaseModel):
    """Partial update; only fields that were set are sent"""

    task_description: str | None = Field(default=None, min_length=1, description="Task description")
    due_date: datetime | None = Field(default=None, description="Due timestamp")
    process_number: str | None = Field(default=None, description="Court process number")
    type: str | None = Field(default=None, description="Deadline type")
    parties: str | None = Field(default=None, description="Parties involved")
    status: DeadlineStatus | None = Field(default=None, description="Lifecycle state")
    classification: Classification | None = Field(default=None, description="Stored severity tag")
    responsible_user_id: str | None = Field(default=None, description="Assigned user ID")


class AttachmentRef(BaseModel):
    """Uploaded attachment reference"""

    id: str = Field(description="Attachment ID")
    url: str = Field(default="", description="Download URL")
    filename: str = Field(default="", description="Original file name")
