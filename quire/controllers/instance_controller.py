import time
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from quire.models.forward_request import ForwardReply, ForwardRequest
from quire.utils.constants import (
    INSTANCE_REPLY_TIMEOUT_MS,
    INSTANCE_SEARCH_DELAY_MS,
    INSTANCE_SEARCH_RETRIES,
    CoordinationOutcome,
    InstanceRole,
)
from quire.utils.single_instance import (
    InstanceLock,
    PrimaryWindowHandle,
    PrimaryWindowLocator,
)


@dataclass(frozen=True)
class CoordinationResult:
    """Terminal outcome of the instance coordination."""

    outcome: CoordinationOutcome
    role: InstanceRole
    exit_code: int = 0
    reply: ForwardReply | None = None


class InstanceController:
    """
    Decides whether this process is the primary instance or forwards its request.

    The role comes from a process-wide named lock and is computed once. A
    secondary instance looks for the primary's window a bounded number of
    times, forwards its request and exits. Whenever the primary cannot be
    reached the process carries on as primary instead.
    """

    def __init__(
        self,
        lock: InstanceLock,
        locator: PrimaryWindowLocator,
        retry_count: int = INSTANCE_SEARCH_RETRIES,
        retry_delay: float = INSTANCE_SEARCH_DELAY_MS / 1000,
        reply_timeout_ms: int = INSTANCE_REPLY_TIMEOUT_MS,
        release_shared_state: Callable[[], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.lock = lock
        self.locator = locator
        self.retry_count = retry_count
        self.retry_delay = retry_delay
        self.reply_timeout_ms = reply_timeout_ms
        self._release_shared_state = release_shared_state
        self._sleep = sleep
        self._role: InstanceRole | None = None

    @property
    def role(self) -> InstanceRole | None:
        """The role determined so far, None before determine_role ran."""
        return self._role

    def determine_role(self, always_multi_instance: bool) -> InstanceRole:
        """
        Create the named lock and derive this process' role from it.

        The lock is always attempted first; ``always_multi_instance`` then
        overrides a secondary role. Later calls return the first result.
        """
        if self._role is not None:
            return self._role

        lock_existed = not self.lock.acquire()
        if always_multi_instance:
            role = InstanceRole.PRIMARY
        elif lock_existed:
            role = InstanceRole.SECONDARY
        else:
            role = InstanceRole.PRIMARY
        logger.info(
            f"Instance role: {role.value} (lock existed: {lock_existed}, multi instance: {always_multi_instance})"
        )
        self._role = role
        return role

    def find_primary_window(self) -> PrimaryWindowHandle | None:
        """Look for the primary's window, retrying with a fixed pause in between."""
        window = self.locator.find()
        attempt = 0
        while window is None and attempt < self.retry_count:
            attempt += 1
            self._sleep(self.retry_delay)
            logger.debug(f"Primary window not found, retry {attempt}/{self.retry_count}")
            window = self.locator.find()
        return window

    def coordinate(
        self, role: InstanceRole, request: ForwardRequest
    ) -> CoordinationResult:
        """
        Run the coordination for an already determined role.

        :param role: Result of determine_role
        :param request: What to hand to the primary if this is a secondary
        :return: PROCEED_AS_PRIMARY, or FORWARD_AND_EXIT with the exit code
        """
        if role is InstanceRole.PRIMARY:
            return CoordinationResult(CoordinationOutcome.PROCEED_AS_PRIMARY, role)

        window = self.find_primary_window()
        if window is None:
            logger.warning(
                "Another instance holds the lock but its window could not be found. Starting as primary."
            )
            return CoordinationResult(CoordinationOutcome.PROCEED_AS_PRIMARY, role)

        if self._release_shared_state is not None:
            self._release_shared_state()

        try:
            reply = window.send(request, self.reply_timeout_ms)
        except ConnectionError as e:
            logger.warning(
                f"Could not forward the request to the primary instance ({e}). Starting as primary."
            )
            return CoordinationResult(CoordinationOutcome.PROCEED_AS_PRIMARY, role)

        if reply is not None and not reply.accepted:
            logger.warning("Primary instance rejected the forwarded request")
        logger.info(
            f"Forwarded {len(request.config.files)} file(s) to the primary instance, exiting"
        )
        return CoordinationResult(
            CoordinationOutcome.FORWARD_AND_EXIT, role, exit_code=0, reply=reply
        )
