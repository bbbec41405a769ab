from midivault.cli.console import get_console
from midivault.cli.util.runner import run_handler
from midivault.domain.notification.command.mark_read import (
    MarkNotificationRead,
    MarkNotificationReadHandler,
)
from midivault.domain.notification.query.list_notifications import (
    ListNotifications,
    ListNotificationsHandler,
)


def inbox(*, read: str | None = None) -> None:
    """Show who liked your records.

    Args:
        read: Mark this notification as read first.
    """
    console = get_console()
    if read is not None:
        result = run_handler(MarkNotificationReadHandler, MarkNotificationRead(notification_id=read))
        if not result.changed:
            console.info(f"Nothing to mark for {read}")

    listing = run_handler(ListNotificationsHandler, ListNotifications())
    console.notifications(listing.items, listing.unread)
