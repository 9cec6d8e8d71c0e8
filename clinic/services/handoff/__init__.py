"""External hand-off channels."""

from .templates import BookingMessageTemplates
from .whatsapp import WhatsAppHandoff, build_whatsapp_url

__all__ = ["BookingMessageTemplates", "WhatsAppHandoff", "build_whatsapp_url"]
