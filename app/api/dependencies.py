from fastapi import Depends, Request
from typing import Optional

from app.core.config import Settings, settings
from app.core.email_client import ResendClient
from app.services.contact_service import ContactService
from app.services.content import ContentRenderer


def get_settings() -> Settings:
    return settings


def get_email_client(request: Request) -> ResendClient:
    return request.app.state.email_client


def get_content_renderer(request: Request) -> Optional[ContentRenderer]:
    return getattr(request.app.state, "content_renderer", None)


def get_contact_service(
    email_client: ResendClient = Depends(get_email_client),
    renderer: Optional[ContentRenderer] = Depends(get_content_renderer),
    app_settings: Settings = Depends(get_settings),
) -> ContactService:
    return ContactService(email_client, app_settings, renderer)
