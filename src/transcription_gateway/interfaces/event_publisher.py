"""Abstract interface for event publishing."""

from abc import ABC, abstractmethod

from transcription_gateway.domain.models import ProcessingState


class EventPublisher(ABC):
    """Abstract base class for fire-and-forget event publishers."""

    @abstractmethod
    def start(self) -> None:
        """Opens the broker connection and begins delivering events."""

    @abstractmethod
    def close(self) -> None:
        """Delivers events already accepted, then releases the connection."""

    @abstractmethod
    def publish_state(self, state: ProcessingState) -> None:
        """
        Announces the gateway's processing state.

        Args:
            state: The state to publish on the state topic.

        Raises:
            EventPublishError: Only if the implementation cannot accept the event.
        """

    @abstractmethod
    def publish_text(self, text: str) -> None:
        """
        Publishes a recognized transcript.

        Args:
            text: The transcript to publish on the text topic.

        Raises:
            EventPublishError: Only if the implementation cannot accept the event.
        """
