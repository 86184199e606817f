"""Pydantic models for BongoStats data structures."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MouseButton(str, Enum):
    """Mouse buttons counted by the store."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"
    MIDDLE = "MIDDLE"

    @classmethod
    def parse(cls, label: str) -> "MouseButton":
        """Parse a button label case-insensitively.

        Raises:
            ValueError: If label is not LEFT, RIGHT or MIDDLE
        """
        try:
            return cls(str(label).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown mouse button label: {label!r}")


class CounterSet(BaseModel):
    """Activity tallies for one calendar day."""

    key_press_counts: dict[int, int] = Field(
        default_factory=dict,
        alias="keyPressCounts",
        description="Key presses per virtual-key code",
    )
    mouse_button_counts: dict[str, int] = Field(
        default_factory=dict,
        alias="mouseButtonCounts",
        description="Clicks per mouse button label",
    )
    total_minutes_open: float = Field(
        default=0.0,
        ge=0.0,
        alias="totalMinutesOpen",
        description="Minutes the application has been open",
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def total_key_presses(self) -> int:
        return sum(self.key_press_counts.values())

    def total_mouse_clicks(self) -> int:
        return sum(self.mouse_button_counts.values())

    def total_activity(self) -> int:
        """Key presses plus mouse clicks."""
        return self.total_key_presses() + self.total_mouse_clicks()

    def is_empty(self) -> bool:
        return self.total_activity() == 0 and self.total_minutes_open == 0.0


class DailyRecord(BaseModel):
    """Contents of one daily stats file."""

    year: int | None = Field(default=None, description="Calendar year tag")
    date: str = Field(default="", description="Write time, YYYY-MM-DD HH:MM:SS")
    counters: CounterSet = Field(default_factory=CounterSet)

    model_config = ConfigDict(extra="ignore")


class RankedInput(BaseModel):
    """One entry of the top inputs ranking."""

    name: str = Field(..., description="Key name or '<BUTTON> CLICK'")
    count: int = Field(..., ge=0, description="Number of presses")
    kind: str = Field(..., description="'key' or 'mouse'")

    model_config = ConfigDict(extra="ignore")


class AggregateReport(BaseModel):
    """Year-level wrapped statistics summed over daily files."""

    year: int = Field(..., description="Calendar year")
    total_key_presses: int = Field(default=0, alias="totalKeyPresses")
    total_mouse_clicks: int = Field(default=0, alias="totalMouseClicks")
    total_inputs: int = Field(default=0, alias="totalInputs")
    total_minutes_open: float = Field(default=0.0, alias="totalMinutesOpen")
    days_recorded: int = Field(
        default=0, alias="daysRecorded", description="Daily files that parsed"
    )
    files_skipped: int = Field(
        default=0, alias="filesSkipped", description="Daily files that failed to parse"
    )
    key_press_counts: dict[int, int] = Field(
        default_factory=dict, alias="keyPressCounts"
    )
    mouse_button_counts: dict[str, int] = Field(
        default_factory=dict, alias="mouseButtonCounts"
    )
    top_inputs: list[RankedInput] = Field(default_factory=list, alias="topInputs")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
