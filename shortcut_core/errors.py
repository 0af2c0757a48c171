class ShortcutError(Exception):
    """Base class for every failure raised while running a capability."""


class PreconditionError(ShortcutError):
    """A capability-specific combination of inputs is missing. Raised before any model call."""


class DispatchError(ShortcutError):
    """The external model call did not produce a usable result."""

    def __init__(self, capability: str, message: str):
        super().__init__(f"{capability}: {message}")
        self.capability = capability


class TransportError(DispatchError):
    """Network failure, remote error response, or no client configured."""


class ContractMismatchError(DispatchError):
    """The model's response could not be parsed into the output contract."""
