from unittest.mock import MagicMock

import pytest

from quire.controllers.instance_controller import InstanceController
from quire.models.forward_request import ForwardReply, ForwardRequest
from quire.models.launch_config import LaunchConfig
from quire.utils.constants import CoordinationOutcome, InstanceRole


@pytest.fixture
def sleeps() -> list[float]:
    return []


def make_controller(
    lock_acquired: bool,
    windows: list[MagicMock | None],
    sleeps: list[float],
    release_shared_state: MagicMock | None = None,
) -> InstanceController:
    lock = MagicMock()
    lock.acquire.return_value = lock_acquired
    locator = MagicMock()
    locator.find.side_effect = windows
    return InstanceController(
        lock,
        locator,
        retry_count=5,
        retry_delay=0.1,
        reply_timeout_ms=1000,
        release_shared_state=release_shared_state,
        sleep=sleeps.append,
    )


def make_request() -> ForwardRequest:
    return ForwardRequest(
        config=LaunchConfig(files=["/tmp/a.txt"]), working_directory="/tmp"
    )


class TestDetermineRole:
    def test_fresh_lock_is_primary(self, sleeps: list[float]) -> None:
        controller = make_controller(True, [], sleeps)
        assert controller.determine_role(False) is InstanceRole.PRIMARY

    def test_existing_lock_is_secondary(self, sleeps: list[float]) -> None:
        controller = make_controller(False, [], sleeps)
        assert controller.determine_role(False) is InstanceRole.SECONDARY

    def test_multi_instance_overrides_secondary(self, sleeps: list[float]) -> None:
        controller = make_controller(False, [], sleeps)
        assert controller.determine_role(True) is InstanceRole.PRIMARY
        # The lock is still attempted
        controller.lock.acquire.assert_called_once()

    def test_role_is_computed_once(self, sleeps: list[float]) -> None:
        controller = make_controller(False, [], sleeps)
        assert controller.role is None
        assert controller.determine_role(False) is InstanceRole.SECONDARY
        assert controller.determine_role(True) is InstanceRole.SECONDARY
        assert controller.role is InstanceRole.SECONDARY
        controller.lock.acquire.assert_called_once()


class TestCoordinate:
    def test_primary_proceeds(self, sleeps: list[float]) -> None:
        controller = make_controller(True, [], sleeps)
        result = controller.coordinate(InstanceRole.PRIMARY, make_request())
        assert result.outcome is CoordinationOutcome.PROCEED_AS_PRIMARY
        assert result.role is InstanceRole.PRIMARY
        controller.locator.find.assert_not_called()

    def test_window_never_found_falls_back_to_primary(
        self, sleeps: list[float]
    ) -> None:
        controller = make_controller(False, [None] * 6, sleeps)
        result = controller.coordinate(InstanceRole.SECONDARY, make_request())

        assert result.outcome is CoordinationOutcome.PROCEED_AS_PRIMARY
        assert controller.locator.find.call_count == 6
        assert sleeps == [0.1] * 5

    def test_window_found_forwards_and_exits(self, sleeps: list[float]) -> None:
        window = MagicMock()
        window.send.return_value = ForwardReply(in_system_tray=True)
        release = MagicMock()
        controller = make_controller(False, [None, None, window], sleeps, release)
        request = make_request()

        result = controller.coordinate(InstanceRole.SECONDARY, request)

        assert result.outcome is CoordinationOutcome.FORWARD_AND_EXIT
        assert result.exit_code == 0
        assert result.reply == ForwardReply(in_system_tray=True)
        assert sleeps == [0.1, 0.1]
        release.assert_called_once()
        window.send.assert_called_once_with(request, 1000)

    def test_missing_reply_still_exits(self, sleeps: list[float]) -> None:
        window = MagicMock()
        window.send.return_value = None
        controller = make_controller(False, [window], sleeps)

        result = controller.coordinate(InstanceRole.SECONDARY, make_request())

        assert result.outcome is CoordinationOutcome.FORWARD_AND_EXIT
        assert result.reply is None
        assert sleeps == []

    def test_failed_write_falls_back_to_primary(self, sleeps: list[float]) -> None:
        window = MagicMock()
        window.send.side_effect = ConnectionError("broken pipe")
        controller = make_controller(False, [window], sleeps)

        result = controller.coordinate(InstanceRole.SECONDARY, make_request())

        assert result.outcome is CoordinationOutcome.PROCEED_AS_PRIMARY
        assert result.role is InstanceRole.SECONDARY

    def test_zero_retries(self, sleeps: list[float]) -> None:
        controller = make_controller(False, [None], sleeps)
        controller.retry_count = 0

        result = controller.coordinate(InstanceRole.SECONDARY, make_request())

        assert result.outcome is CoordinationOutcome.PROCEED_AS_PRIMARY
        assert sleeps == []
