import logging

from jinja2 import Environment, BaseLoader
from typing import Any, Dict, Optional

from app.core.exceptions import RendererUnavailableError
from app.schemas.contact import ContentSource, HtmlContent, TemplateContent

logger = logging.getLogger(__name__)


class ContentRenderer:
    """Renders inline Jinja2 templates into email HTML."""

    def __init__(self):
        # autoescape stays off so submitted text reaches the email as typed
        self.env = Environment(loader=BaseLoader(), autoescape=False)

    def render(self, template: str, context: Dict[str, Any]) -> str:
        return self.env.from_string(template).render(**context)


def resolve_content(
    source: ContentSource, renderer: Optional[ContentRenderer] = None
) -> str:
    """
    Turn a content source into the final HTML string.

    Args:
        source (ContentSource): pre-rendered HTML or a template with its context.
        renderer (Optional[ContentRenderer]): needed only for template sources.

    Returns:
        str: the HTML body.
    """

    if isinstance(source, HtmlContent):
        return source.html

    if isinstance(source, TemplateContent):
        if renderer is None:
            logger.error("Service: template content given but no renderer configured")
            raise RendererUnavailableError(
                "a renderer is required to resolve template content"
            )
        return renderer.render(source.template, source.context)

    raise TypeError(f"unsupported content source: {type(source).__name__}")
