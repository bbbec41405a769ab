"""Catalog housekeeping: rewrite storage without duplicates, or wipe everything."""

from dataclasses import field

import logfire

from midivault.domain.auth.model.identity import Identity, user_id_of
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.shared.authorization.gate import authenticated, public
from midivault.domain.shared.command import Command, CommandHandler, Result


class CompactCatalog(Command):
    pass


class CatalogCompacted(Result):
    duplicates_removed: int


class CompactCatalogHandler(CommandHandler[CompactCatalog, CatalogCompacted]):
    __auth__ = public()
    catalog_service: CatalogService

    async def run(self, cmd: CompactCatalog) -> CatalogCompacted:
        with logfire.span("CompactCatalog"):
            dropped = await self.catalog_service.compact()
            return CatalogCompacted(duplicates_removed=dropped)


class ClearCatalog(Command):
    pass


class CatalogCleared(Result):
    records_removed: int


class ClearCatalogHandler(CommandHandler[ClearCatalog, CatalogCleared]):
    __auth__ = authenticated()
    identity_provider: IdentityProvider
    catalog_service: CatalogService
    principal: Identity | None = field(default=None, init=False)

    async def run(self, cmd: ClearCatalog) -> CatalogCleared:
        with logfire.span("ClearCatalog"):
            removed = await self.catalog_service.clear_all(user_id_of(self.principal))
            return CatalogCleared(records_removed=removed)
