from typing import Any

from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.shared.authorization.gate import public
from midivault.domain.shared.query import Query, QueryHandler, Result


class ExportRecords(Query):
    pass


class RawRecords(Result):
    documents: list[Any]


class ExportRecordsHandler(QueryHandler[ExportRecords, RawRecords]):
    """Dump the records slot as stored, duplicates and all."""

    __auth__ = public()
    catalog_service: CatalogService

    async def run(self, cmd: ExportRecords) -> RawRecords:
        return RawRecords(documents=await self.catalog_service.export_raw())
