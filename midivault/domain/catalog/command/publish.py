from dataclasses import field
from datetime import datetime

import logfire

from midivault.domain.auth.model.identity import Identity, user_id_of
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.catalog.model.value import RecordId, UploadFile
from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.shared.authorization.gate import authenticated
from midivault.domain.shared.command import Command, CommandHandler, Result


class PublishRecord(Command):
    title: str
    primary: UploadFile
    secondary: dict[str, UploadFile] = {}


class RecordPublished(Result):
    record_id: RecordId
    created_at: datetime


class PublishRecordHandler(CommandHandler[PublishRecord, RecordPublished]):
    __auth__ = authenticated()
    identity_provider: IdentityProvider
    catalog_service: CatalogService
    principal: Identity | None = field(default=None, init=False)

    async def run(self, cmd: PublishRecord) -> RecordPublished:
        with logfire.span("PublishRecord", title=cmd.title):
            record = await self.catalog_service.publish(
                user_id_of(self.principal),
                cmd.title,
                cmd.primary,
                cmd.secondary,
            )
            return RecordPublished(record_id=record.id, created_at=record.created_at)
