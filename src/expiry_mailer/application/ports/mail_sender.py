"""Port for mail transmission - driven/secondary port."""

from typing import Protocol

from .token_provider import AccessToken


class MailSender(Protocol):
    """
    Port for sending one HTML message.

    This is a driven (secondary) port that defines how the application
    delivers the report to operators.
    """

    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        body: str,
        token: AccessToken,
    ) -> None:
        """
        Send an HTML message.

        Raises:
            MailSendError: If the provider rejects the message.
        """
        ...
