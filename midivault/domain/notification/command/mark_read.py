from dataclasses import field

import logfire

from midivault.domain.auth.model.identity import Identity
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.notification.service.notification_log import NotificationLog
from midivault.domain.shared.authorization.gate import authenticated
from midivault.domain.shared.command import Command, CommandHandler, Result


class MarkNotificationRead(Command):
    notification_id: str


class NotificationMarked(Result):
    changed: bool


class MarkNotificationReadHandler(CommandHandler[MarkNotificationRead, NotificationMarked]):
    __auth__ = authenticated()
    identity_provider: IdentityProvider
    notification_log: NotificationLog
    principal: Identity | None = field(default=None, init=False)

    async def run(self, cmd: MarkNotificationRead) -> NotificationMarked:
        assert self.principal is not None
        with logfire.span("MarkNotificationRead", notification_id=cmd.notification_id):
            # Only the recipient can mark their own notifications.
            owned = {n.id for n in self.notification_log.list_for(self.principal.user_id)}
            if cmd.notification_id not in owned:
                return NotificationMarked(changed=False)
            changed = await self.notification_log.mark_read(cmd.notification_id)
            return NotificationMarked(changed=changed)
