"""Shared error types for the agent runtime."""

from dsro.core.errors import SROError


class RuntimeProtocolError(SROError):
    """Base error for failures inside the agent runtime."""


class UnknownAddressError(RuntimeProtocolError):
    """A message was routed to an address no container has registered."""

    def __init__(self, address: object) -> None:
        self.address = address
        super().__init__(f"No agent registered at {address}")


class ConvergenceTimeoutError(RuntimeProtocolError):
    """The orchestrator watchdog expired before every agent terminated."""

    def __init__(self, timeout: float, terminated: int, total: int) -> None:
        self.timeout = timeout
        self.terminated = terminated
        self.total = total
        super().__init__(
            f"Agents did not converge within {timeout}s ({terminated}/{total} terminated)"
        )
