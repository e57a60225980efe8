import logging

from datetime import datetime
from typing import Any, Dict, Optional

from app.core.config import Settings
from app.core.email_client import ResendClient
from app.core.exceptions import ProviderError
from app.schemas.contact import (
    ContactSubmission,
    EmailEnvelope,
    TemplateContent,
)
from app.services.content import ContentRenderer, resolve_content

logger = logging.getLogger(__name__)


CONTACT_EMAIL_TEMPLATE = """
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <meta name="viewport" content="width=device-width, initial-scale=1.0">
            <title>{{ subject }}</title>
            <style>
                body {
                    font-family: Arial, sans-serif;
                    line-height: 1.6;
                    color: #333;
                    max-width: 600px;
                    margin: 0 auto;
                    padding: 20px;
                }
                .header {
                    background-color: #fbfe58;
                    color: black;
                    padding: 20px;
                    text-align: center;
                    border-radius: 5px 5px 0 0;
                }
                .logo {
                    width: 100px;
                    height: auto;
                }
                .content {
                    padding: 20px;
                    background-color: #f9f9f9;
                    border-left: 1px solid #ddd;
                    border-right: 1px solid #ddd;
                }
                .message {
                    background-color: white;
                    padding: 15px;
                    border-radius: 4px;
                    border: 1px solid #eee;
                    margin: 15px 0;
                }
                .note {
                    font-size: 13px;
                }
                .button {
                    display: inline-block;
                    padding: 10px 20px;
                    background-color: #e5e91d;
                    color: black;
                    text-decoration: none;
                    border-radius: 4px;
                    margin: 15px 0;
                }
                .footer {
                    background-color: #ecf0f1;
                    padding: 15px;
                    text-align: center;
                    font-size: 12px;
                    color: #7f8c8d;
                    border-radius: 0 0 5px 5px;
                    border: 1px solid #ddd;
                    border-top: none;
                }
                .footer a {
                    color: #1da5ff;
                }
            </style>
        </head>
        <body>
            <div class="header">
                <img class="logo" src="{{ site_url }}/Logo.png" alt="{{ app_name }} Logo">
                <h1>{{ subject }}</h1>
            </div>

            <div class="content">
                <div class="message">
                    {{ message }}
                </div>

                <p class="note">Mensaje de envío de datos para registrarse en un plan.</p>

                <a href="{{ site_url }}/contacto" class="button">Ver más información</a>
            </div>

            <div class="footer">
                <p>&copy; {{ current_year }} {{ app_name }}. Todos los derechos reservados.</p>
                <p>
                    <a href="{{ site_url }}">Visita nuestro sitio web</a> |
                    <a href="{{ site_url }}/privacidad">Política de privacidad</a>
                </p>
            </div>
        </body>
        </html>
        """


def render_contact_email(
    submission: ContactSubmission,
    app_name: str,
    site_url: str,
    year: Optional[int] = None,
) -> TemplateContent:
    return TemplateContent(
        template=CONTACT_EMAIL_TEMPLATE,
        context={
            "subject": submission.subject,
            "message": submission.message,
            "app_name": app_name,
            "site_url": site_url.rstrip("/"),
            "current_year": year or datetime.now().year,
        },
    )


class ContactService:
    def __init__(
        self,
        email_client: ResendClient,
        settings: Settings,
        renderer: Optional[ContentRenderer] = None,
    ):
        self.email_client = email_client
        self.settings = settings
        self.renderer = renderer

    def build_envelope(self, submission: ContactSubmission) -> EmailEnvelope:
        content = render_contact_email(
            submission, self.settings.APP_NAME, self.settings.SITE_URL
        )

        return EmailEnvelope(
            from_=self.settings.MAIL_FROM,
            to=[submission.email],
            subject=submission.subject,
            html=resolve_content(content, self.renderer),
            text=submission.message,
            reply_to=self.settings.MAIL_REPLY_TO or None,
        )

    def send_contact_message(self, submission: ContactSubmission) -> Dict[str, Any]:
        """
        Deliver a contact form submission through the email provider.

        Args:
            submission (ContactSubmission): the validated form fields.

        Returns:
            Dict[str, Any]: the provider's response data (the message id).

        Raises:
            ProviderError: the provider rejected the message.
            TransportError: the provider could not be reached.
        """

        envelope = self.build_envelope(submission)
        result = self.email_client.send_email(envelope)

        if result.error is not None:
            logger.error(
                f"Service: provider rejected email to {submission.email}: "
                f"{result.error.name}: {result.error.message}"
            )
            raise ProviderError(
                result.error.name, result.error.message, result.error.status_code
            )

        logger.info(f"Service: contact email sent to {submission.email}")
        return result.data or {}
