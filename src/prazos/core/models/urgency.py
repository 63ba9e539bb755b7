"""UrgencyDescriptor -- render-agnostic result of urgency classification"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import UrgencyLevel


class UrgencyDescriptor(BaseModel):
    """Computed urgency for one deadline at one instant

    Never persisted: "today" moves between renders.
    """

    model_config = ConfigDict(frozen=True)

    level: UrgencyLevel = Field(description="Urgency level")
    label: str = Field(description="Human readable label")
    priority: int = Field(ge=0, le=5, description="Rank, higher is more urgent")
    icon: str = Field(description="Icon hint")
    color: str = Field(description="Tone name (red, orange, ...)")
    should_animate: bool = Field(default=False, description="Whether the indicator pulses")
    days_until_due: int | None = Field(
        default=None,
        description="Whole days from today to the due date; None for terminal levels",
    )
