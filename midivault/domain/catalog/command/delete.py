from dataclasses import field

import logfire

from midivault.domain.auth.model.identity import Identity, user_id_of
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.catalog.model.value import RecordId
from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.shared.authorization.gate import authenticated
from midivault.domain.shared.command import Command, CommandHandler, Result


class DeleteRecord(Command):
    record_id: RecordId


class RecordDeleted(Result):
    deleted: bool


class DeleteRecordHandler(CommandHandler[DeleteRecord, RecordDeleted]):
    __auth__ = authenticated()
    identity_provider: IdentityProvider
    catalog_service: CatalogService
    principal: Identity | None = field(default=None, init=False)

    async def run(self, cmd: DeleteRecord) -> RecordDeleted:
        with logfire.span("DeleteRecord", record_id=cmd.record_id):
            deleted = await self.catalog_service.delete(user_id_of(self.principal), cmd.record_id)
            return RecordDeleted(deleted=deleted)
