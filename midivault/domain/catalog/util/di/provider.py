from dishka import provide

from midivault.config import Config
from midivault.domain.auth.model.value import UserId
from midivault.domain.auth.service.account import AccountService
from midivault.domain.catalog.command.delete import DeleteRecordHandler
from midivault.domain.catalog.command.like import ToggleLikeHandler
from midivault.domain.catalog.command.maintenance import (
    ClearCatalogHandler,
    CompactCatalogHandler,
)
from midivault.domain.catalog.command.publish import PublishRecordHandler
from midivault.domain.catalog.port.blob_store import BlobStore
from midivault.domain.catalog.query.download import DownloadPayloadHandler
from midivault.domain.catalog.query.export import ExportRecordsHandler
from midivault.domain.catalog.query.get_record import GetRecordHandler
from midivault.domain.catalog.query.list_records import (
    ListRecordsHandler,
    SearchRecordsHandler,
)
from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.catalog.service.metadata_index import MetadataIndex
from midivault.domain.catalog.service.upload_policy import UploadPolicy
from midivault.domain.notification.command.mark_read import MarkNotificationReadHandler
from midivault.domain.notification.query.list_notifications import ListNotificationsHandler
from midivault.domain.notification.service.notification_log import NotificationLog
from midivault.domain.shared.port.confirmation import ConfirmationPort
from midivault.domain.shared.port.slot_store import SlotStore
from midivault.util.di.base import Provider
from midivault.util.di.scope import Scope


class CatalogProvider(Provider):
    # Collections are loaded once per container
    @provide(scope=Scope.APP)
    async def get_metadata_index(self, slots: SlotStore) -> MetadataIndex:
        index = MetadataIndex(slots)
        await index.load()
        return index

    @provide(scope=Scope.APP)
    async def get_notification_log(self, slots: SlotStore) -> NotificationLog:
        log = NotificationLog(slots)
        await log.load()
        return log

    @provide(scope=Scope.APP)
    def get_upload_policy(self, config: Config) -> UploadPolicy:
        return UploadPolicy(config.uploads.rules)

    @provide(scope=Scope.APP)
    def get_catalog_service(
        self,
        index: MetadataIndex,
        blobs: BlobStore,
        notifications: NotificationLog,
        accounts: AccountService,
        policy: UploadPolicy,
        confirmation: ConfirmationPort,
        config: Config,
    ) -> CatalogService:
        admin = config.catalog.admin_username
        service = CatalogService(
            index=index,
            blobs=blobs,
            notifications=notifications,
            identities=accounts,
            policy=policy,
            confirmation=confirmation,
            admin_username=UserId(admin) if admin else None,
        )
        # Reload catalog state whenever the session identity changes
        accounts.listener = service
        return service

    # Command Handlers
    publish_handler = provide(PublishRecordHandler, scope=Scope.UOW)
    delete_handler = provide(DeleteRecordHandler, scope=Scope.UOW)
    like_handler = provide(ToggleLikeHandler, scope=Scope.UOW)
    compact_handler = provide(CompactCatalogHandler, scope=Scope.UOW)
    clear_handler = provide(ClearCatalogHandler, scope=Scope.UOW)
    mark_read_handler = provide(MarkNotificationReadHandler, scope=Scope.UOW)

    # Query Handlers
    list_records_handler = provide(ListRecordsHandler, scope=Scope.UOW)
    search_records_handler = provide(SearchRecordsHandler, scope=Scope.UOW)
    get_record_handler = provide(GetRecordHandler, scope=Scope.UOW)
    download_handler = provide(DownloadPayloadHandler, scope=Scope.UOW)
    export_handler = provide(ExportRecordsHandler, scope=Scope.UOW)
    list_notifications_handler = provide(ListNotificationsHandler, scope=Scope.UOW)
