from abc import ABC, abstractmethod


class IMailer(ABC):
    """Outbound transactional mail - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, html: str) -> str:
        """
        Deliver one message.

        Returns:
            Message ID assigned to the outgoing message

        Raises:
            MailFailure: delivery failed or timed out
        """
        pass
