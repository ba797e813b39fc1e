"""Caller context passed explicitly into application services."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminContext:
    """The authenticated admin performing an operation.

    Attributes:
        actor: Label identifying the admin credential.
        request_id: Request ID for correlation.
    """

    actor: str
    request_id: str | None = None

    def log_fields(self) -> dict[str, str | None]:
        """Fields bound to every log event emitted for this caller."""
        return {"actor": self.actor, "request_id": self.request_id}


SYSTEM_CONTEXT = AdminContext(actor="system")
