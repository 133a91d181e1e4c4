"""Call-control state shadowed from a headset."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class MuteState(str, Enum):
    """Microphone mute state as reported by the headset."""

    NO_ONGOING_CALLS = "NoOngoingCalls"
    MUTED = "Muted"
    UNMUTED = "Unmuted"

    def __str__(self) -> str:
        return self.value


class HoldState(str, Enum):
    """Hold state as reported by the headset."""

    NO_ONGOING_CALLS = "NoOngoingCalls"
    ON_HOLD = "OnHold"
    ACTIVE = "Active"

    def __str__(self) -> str:
        return self.value


class CallState(BaseModel):
    """Last known call-control state of a single device.

    No cross-field consistency is enforced: each field mirrors the most
    recent value of its own event stream.
    """

    model_config = ConfigDict(validate_assignment=True)

    mute: MuteState = MuteState.NO_ONGOING_CALLS
    hold: HoldState = HoldState.NO_ONGOING_CALLS
    ongoing_calls: int = Field(default=0, ge=0)
    ringing: StrictBool = False

    def describe(self) -> str:
        """Render the snapshot for a transition record."""
        return (
            f"ongoingCalls: {self.ongoing_calls}, mute: {self.mute}, "
            f"hold: {self.hold}, ringing: {self.ringing}"
        )
