"""FilterState -- immutable snapshot of the deadline list filters

Every field is a string; an empty string means "no constraint".
Changes always produce a new snapshot through model_copy().
"""

from pydantic import BaseModel, ConfigDict, Field

# days_until_due sentinel for "before today"
OVERDUE_BUCKET = "overdue"

# Selectable days_until_due buckets ("" = any)
DAYS_UNTIL_DUE_BUCKETS: tuple[str, ...] = ("", "1", "3", "7", "15", "30", OVERDUE_BUCKET)


class FilterState(BaseModel):
    """Deadline list filter snapshot"""

    model_config = ConfigDict(frozen=True)

    search: str = Field(default="", description="Free text over description and process")
    type: str = Field(default="", description="Deadline type")
    responsible_id: str = Field(default="", description="Responsible user ID")
    classification: str = Field(default="", description="Classification wire value")
    status: str = Field(default="", description="Status wire value")
    due_date_from: str = Field(default="", description="Lower due date bound (ISO date)")
    due_date_to: str = Field(default="", description="Upper due date bound (ISO date)")
    days_until_due: str = Field(default="", description="Days-until-due bucket")
    process_number: str = Field(default="", description="Process number")
    parties: str = Field(default="", description="Parties")

    def is_empty(self) -> bool:
        """True when no field constrains the list"""
        return not any(self.model_dump().values())
