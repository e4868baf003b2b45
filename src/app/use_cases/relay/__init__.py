"""Use cases de relay."""

from app.use_cases.relay.relay_message import RelayMessageUseCase

__all__ = ["RelayMessageUseCase"]
