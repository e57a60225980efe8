import logging
import requests

from app.core.config import Settings
from app.core.exceptions import ConfigError, TransportError
from app.schemas.contact import EmailEnvelope, EmailSendResult, ProviderErrorDetail

logger = logging.getLogger(__name__)

GENERIC_PROVIDER_ERROR = (
    "Internal server error. We are unable to process your request right now, "
    "please try again later."
)


class ResendClient:
    """
    Thin client for the Resend transactional email API.

    One instance lives for the whole process. It keeps no connection state, so
    threadpool workers can share it. Each call to ``send_email`` issues exactly
    one HTTP request; nothing is retried.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.resend.com",
        user_agent: str = "mrogym-contact/1.0",
        timeout: float = 10.0,
    ):
        if not api_key or not api_key.strip():
            raise ConfigError("missing Resend API key")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {api_key.strip()}",
            "User-Agent": user_agent,
            "Content-Type": "application/json",
        }

    def send_email(self, envelope: EmailEnvelope) -> EmailSendResult:
        """
        Send one email through the provider.

        Args:
            envelope (EmailEnvelope): sender, recipients, subject and rendered body.

        Returns:
            EmailSendResult: ``data`` with the provider response on success, or
            ``error`` with the provider's structured error.

        Raises:
            TransportError: the provider could not be reached or answered garbage.
        """

        try:
            response = requests.post(
                f"{self.base_url}/emails",
                json=envelope.to_payload(),
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Client: request to email provider failed: {str(e)}")
            raise TransportError(
                "Unable to fetch data. The request could not be resolved."
            ) from e

        if not response.ok:
            return EmailSendResult(error=self._parse_error(response))

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Client: unreadable success response from email provider ({response.status_code})"
            )
            raise TransportError("email provider returned an unreadable response") from e

        logger.info(f"Client: email accepted by provider for {envelope.to}")
        return EmailSendResult(data=data)

    @staticmethod
    def _parse_error(response: requests.Response) -> ProviderErrorDetail:
        try:
            body = response.json()
        except ValueError:
            return ProviderErrorDetail(
                message=GENERIC_PROVIDER_ERROR, status_code=response.status_code
            )

        if not isinstance(body, dict):
            return ProviderErrorDetail(
                message=GENERIC_PROVIDER_ERROR, status_code=response.status_code
            )

        status_code = body.get("statusCode")
        if not isinstance(status_code, int):
            status_code = response.status_code

        return ProviderErrorDetail(
            name=str(body.get("name") or "application_error"),
            message=str(body.get("message") or response.reason or GENERIC_PROVIDER_ERROR),
            status_code=status_code,
        )


def build_email_client(settings: Settings) -> ResendClient:
    return ResendClient(
        api_key=settings.RESEND_API_KEY,
        base_url=settings.RESEND_BASE_URL,
        user_agent=settings.RESEND_USER_AGENT,
        timeout=settings.RESEND_TIMEOUT_SECONDS,
    )
