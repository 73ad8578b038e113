import logging

from app.notifications.rules import NOTIFICATION_RULES, POPUP_MESSAGES
from app.notifications.channels import Channel
from app.notifications.events import StoreEvent

logger = logging.getLogger(__name__)


def popup(title: str, description: str, variant: str = "default") -> dict:
    return {"title": title, "description": description, "variant": variant}


def dispatch_event(
    event: StoreEvent,
    *,
    extra: dict | None = None,
    notify_user: bool = True,
    notify_admin: bool = True,
):
    """
    Central notification dispatcher.

    Handles:
    - popup messages for the shopper
    - admin activity log lines

    Returns the popup payload, or None when the event has no popup.
    """

    rules = NOTIFICATION_RULES.get(event, {})
    extra = extra or {}

    response_popup = None

    if notify_user and rules.get(Channel.POPUP_USER):
        title, template = POPUP_MESSAGES[event]
        try:
            description = template.format(**extra)
        except KeyError as e:
            logger.warning(f"Missing popup field {e} for {event.value}")
            description = template
        variant = "destructive" if event == StoreEvent.ORDER_FAILED else "default"
        response_popup = popup(title, description, variant)

    if notify_admin and rules.get(Channel.LOG_ADMIN):
        logger.info(f"[{event.value}] {extra}")

    return response_popup
