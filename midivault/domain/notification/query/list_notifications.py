from dataclasses import field

from midivault.domain.auth.model.identity import Identity
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.notification.model.notification import Notification
from midivault.domain.notification.service.notification_log import NotificationLog
from midivault.domain.shared.authorization.gate import authenticated
from midivault.domain.shared.query import Query, QueryHandler, Result


class ListNotifications(Query):
    pass


class NotificationList(Result):
    items: list[Notification]
    unread: int


class ListNotificationsHandler(QueryHandler[ListNotifications, NotificationList]):
    """The current user's notifications, read and unread."""

    __auth__ = authenticated()
    identity_provider: IdentityProvider
    notification_log: NotificationLog
    principal: Identity | None = field(default=None, init=False)

    async def run(self, cmd: ListNotifications) -> NotificationList:
        assert self.principal is not None
        user_id = self.principal.user_id
        return NotificationList(
            items=self.notification_log.list_for(user_id),
            unread=self.notification_log.unread_count(user_id),
        )
