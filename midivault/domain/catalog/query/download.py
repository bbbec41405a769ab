from midivault.domain.catalog.model.value import PRIMARY_SLOT, RecordId
from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.shared.authorization.gate import public
from midivault.domain.shared.query import Query, QueryHandler, Result


class DownloadPayload(Query):
    record_id: RecordId
    slot: str = PRIMARY_SLOT


class PayloadDownload(Result):
    filename: str
    content_type: str | None
    content: bytes


class DownloadPayloadHandler(QueryHandler[DownloadPayload, PayloadDownload]):
    __auth__ = public()
    catalog_service: CatalogService

    async def run(self, cmd: DownloadPayload) -> PayloadDownload:
        download = await self.catalog_service.download(cmd.record_id, cmd.slot)
        return PayloadDownload(
            filename=download.filename,
            content_type=download.content_type,
            content=download.content,
        )
