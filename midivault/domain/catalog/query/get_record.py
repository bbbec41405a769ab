"""GetRecord query handler - exact id lookup over visible records."""

from midivault.domain.catalog.model.listing import CatalogEntry
from midivault.domain.catalog.model.value import RecordId
from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.shared.authorization.gate import public
from midivault.domain.shared.error import NotFoundError
from midivault.domain.shared.query import Query, QueryHandler, Result


class GetRecord(Query):
    record_id: RecordId


class RecordDetail(Result):
    entry: CatalogEntry


class GetRecordHandler(QueryHandler[GetRecord, RecordDetail]):
    __auth__ = public()
    catalog_service: CatalogService

    async def run(self, cmd: GetRecord) -> RecordDetail:
        entry = await self.catalog_service.find_by_id(cmd.record_id)
        if entry is None:
            raise NotFoundError(f"Record not found: {cmd.record_id}")
        return RecordDetail(entry=entry)
