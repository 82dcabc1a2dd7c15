"""Typed failures raised by the registry and its collaborators.

Every error here is a precondition failure: it is raised before any state
is touched, so catching one means the registry is exactly as it was.
"""


class RegistryError(Exception):
    """Base class for all registry precondition failures."""


class InsufficientFeeError(RegistryError):
    """Payment attached to a merge is below the current merge fee."""

    def __init__(self, required: int, paid: int) -> None:
        self.required = required
        self.paid = paid
        super().__init__(f"Merge fee is {required}, but only {paid} was paid")


class NotOwnerError(RegistryError):
    """Caller is not the current holder of a record."""

    def __init__(self, caller: str, record_id: int) -> None:
        self.caller = caller
        self.record_id = record_id
        super().__init__(f"{caller} does not hold creature #{record_id}")


class SameRecordError(RegistryError):
    """A record cannot be merged with itself."""

    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"Cannot merge creature #{record_id} with itself")


class RecordNotFoundError(RegistryError):
    """Record was never created or has been retired by a merge."""

    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"Creature #{record_id} does not exist")


class UnauthorizedError(RegistryError):
    """Administrator-only operation invoked by someone else."""

    def __init__(self, caller: str, action: str) -> None:
        self.caller = caller
        self.action = action
        super().__init__(f"{caller} is not allowed to {action}")
