from midivault.domain.catalog.model.listing import CatalogEntry
from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.shared.authorization.gate import public
from midivault.domain.shared.query import Query, QueryHandler, Result


class ListRecords(Query):
    pass


class SearchRecords(Query):
    keyword: str = ""


class RecordList(Result):
    items: list[CatalogEntry]
    total: int


class ListRecordsHandler(QueryHandler[ListRecords, RecordList]):
    __auth__ = public()
    catalog_service: CatalogService

    async def run(self, cmd: ListRecords) -> RecordList:
        entries = await self.catalog_service.list_all()
        return RecordList(items=entries, total=len(entries))


class SearchRecordsHandler(QueryHandler[SearchRecords, RecordList]):
    __auth__ = public()
    catalog_service: CatalogService

    async def run(self, cmd: SearchRecords) -> RecordList:
        entries = await self.catalog_service.search(cmd.keyword)
        return RecordList(items=entries, total=len(entries))
