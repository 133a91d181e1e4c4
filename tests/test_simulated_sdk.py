"""Tests for the simulated headset SDK."""

import pytest

from src.ecc_console.models.schemas import LogLevel
from src.ecc_console.models.state import HoldState, MuteState
from src.ecc_console.services.errors import CallControlError, UnsupportedDeviceError
from src.ecc_console.services.simulated_sdk import SimulatedEventStream, SimulatedHeadsetSDK


class TestSimulatedEventStream:
    """Test cases for SimulatedEventStream."""

    def test_replays_current_value(self):
        """Test subscribers with an initial value receive it immediately."""
        stream = SimulatedEventStream(0)
        received = []

        stream.subscribe(received.append)
        stream.publish(1)

        assert received == [0, 1]
        assert stream.value == 1

    def test_plain_stream_does_not_replay(self):
        """Test a stream without initial value only forwards new values."""
        stream = SimulatedEventStream()
        stream.publish("early")
        received = []

        stream.subscribe(received.append)
        stream.publish("late")

        assert received == ["late"]
        assert stream.value is None

    def test_dispose_stops_delivery(self):
        """Test disposed subscriptions receive nothing more."""
        stream = SimulatedEventStream()
        received = []

        subscription = stream.subscribe(received.append)
        subscription.dispose()
        subscription.dispose()
        stream.publish(1)

        assert received == []


class TestSimulatedCallControl:
    """Test cases for SimulatedCallControl."""

    @pytest.fixture
    def sdk(self):
        return SimulatedHeadsetSDK(app_id="Test", app_name="Test App", partner_key="key")

    @pytest.mark.asyncio
    async def test_incoming_call_flow(self, sdk):
        """Test ring, accept, mute, hold, resume and end."""
        device = sdk.attach("Headset")
        control = await sdk.create_call_control(device)

        await control.signal_incoming_call()
        assert control.ringing.value is True

        await control.accept_incoming_call()
        assert control.ringing.value is False
        assert control.ongoing_calls.value == 1
        assert control.mute_state.value == MuteState.UNMUTED
        assert control.hold_state.value == HoldState.ACTIVE

        await control.mute()
        assert control.mute_state.value == MuteState.MUTED
        await control.hold()
        assert control.hold_state.value == HoldState.ON_HOLD
        await control.resume()
        assert control.hold_state.value == HoldState.ACTIVE

        await control.end_call()
        assert control.ongoing_calls.value == 0
        assert control.mute_state.value == MuteState.NO_ONGOING_CALLS
        assert control.hold_state.value == HoldState.NO_ONGOING_CALLS

    @pytest.mark.asyncio
    async def test_reject_incoming_call(self, sdk):
        """Test rejecting stops ringing without starting a call."""
        control = await sdk.create_call_control(sdk.attach("Headset"))

        await control.signal_incoming_call()
        await control.reject_incoming_call()

        assert control.ringing.value is False
        assert control.ongoing_calls.value == 0

    @pytest.mark.asyncio
    async def test_second_call_keeps_mute_state(self, sdk):
        """Test starting another call keeps the microphone muted."""
        control = await sdk.create_call_control(sdk.attach("Headset"))

        await control.start_call()
        await control.mute()
        await control.start_call()

        assert control.ongoing_calls.value == 2
        assert control.mute_state.value == MuteState.MUTED

        await control.end_call()
        assert control.ongoing_calls.value == 1
        assert control.mute_state.value == MuteState.MUTED

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "command, message",
        [
            ("end_call", "No ongoing call to end"),
            ("hold", "No active call to put on hold"),
            ("resume", "No call on hold to resume"),
            ("mute", "Cannot mute: no ongoing call"),
            ("unmute", "Cannot unmute: no ongoing call"),
            ("accept_incoming_call", "No incoming call to accept"),
            ("reject_incoming_call", "No incoming call to reject"),
        ],
    )
    async def test_commands_rejected_without_call(self, sdk, command, message):
        """Test commands that need a call fail when idle."""
        control = await sdk.create_call_control(sdk.attach("Headset"))

        with pytest.raises(CallControlError, match=message):
            await getattr(control, command)()

    @pytest.mark.asyncio
    async def test_double_ring_rejected(self, sdk):
        """Test signaling twice fails."""
        control = await sdk.create_call_control(sdk.attach("Headset"))
        await control.signal_incoming_call()

        with pytest.raises(CallControlError, match="already ringing"):
            await control.signal_incoming_call()

    @pytest.mark.asyncio
    async def test_commands_fail_after_detach(self, sdk):
        """Test a detached device rejects commands."""
        device = sdk.attach("Headset")
        control = await sdk.create_call_control(device)

        sdk.detach(device)

        with pytest.raises(CallControlError, match="disconnected"):
            await control.start_call()


class TestSimulatedHeadsetSDK:
    """Test cases for SimulatedHeadsetSDK."""

    @pytest.mark.asyncio
    async def test_devices_announced_on_start(self):
        """Test devices attached before start are published by start."""
        sdk = SimulatedHeadsetSDK(app_id="Test", app_name="Test App", partner_key="key")
        added = []
        sdk.device_added.subscribe(added.append)

        device = sdk.attach("Headset", product_id=7)
        assert added == []

        await sdk.start()
        await sdk.start()

        assert added == [device]
        assert device.serial_number == "SIM000001"
        assert sdk.is_started

    @pytest.mark.asyncio
    async def test_attach_and_detach_after_start(self):
        """Test live attach and detach publish events."""
        sdk = SimulatedHeadsetSDK(app_id="Test", app_name="Test App", partner_key="key")
        added, removed = [], []
        sdk.device_added.subscribe(added.append)
        sdk.device_removed.subscribe(removed.append)
        await sdk.start()

        device = sdk.attach("Headset", serial_number="ABC")
        sdk.detach(device)
        sdk.detach(device)

        assert added == [device]
        assert removed == [device]
        assert sdk.devices == []

    @pytest.mark.asyncio
    async def test_stop_detaches_devices(self):
        """Test stop publishes removal of every device."""
        sdk = SimulatedHeadsetSDK(app_id="Test", app_name="Test App", partner_key="key")
        removed = []
        sdk.device_removed.subscribe(removed.append)
        sdk.attach("A")
        sdk.attach("B")
        await sdk.start()

        await sdk.stop()

        assert [d.name for d in removed] == ["A", "B"]
        assert not sdk.is_started

    @pytest.mark.asyncio
    async def test_unsupported_device(self):
        """Test call control creation fails for devices without ECC."""
        sdk = SimulatedHeadsetSDK(app_id="Test", app_name="Test App", partner_key="key")
        device = sdk.attach("Speakerphone", supports_ecc=False)

        with pytest.raises(UnsupportedDeviceError, match="does not support"):
            await sdk.create_call_control(device)

    @pytest.mark.asyncio
    async def test_unknown_device_logs_error(self, device):
        """Test requesting call control for an unknown device."""
        sdk = SimulatedHeadsetSDK(app_id="Test", app_name="Test App", partner_key="key")
        events = []
        sdk.log_events.subscribe(events.append)

        with pytest.raises(UnsupportedDeviceError, match="not attached"):
            await sdk.create_call_control(device)

        assert events[-1].level == LogLevel.ERROR

    @pytest.mark.asyncio
    async def test_missing_partner_key_warns(self):
        """Test start warns when no partner key is configured."""
        sdk = SimulatedHeadsetSDK(app_id="Test", app_name="Test App")
        events = []
        sdk.log_events.subscribe(events.append)

        await sdk.start()

        assert events[0].level == LogLevel.WARNING
        assert "partner key" in events[0].message
        assert events[1].level == LogLevel.INFO
