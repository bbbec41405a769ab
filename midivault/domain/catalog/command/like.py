from dataclasses import field

import logfire

from midivault.domain.auth.model.identity import Identity, user_id_of
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.catalog.model.value import RecordId
from midivault.domain.catalog.service.catalog import CatalogService
from midivault.domain.shared.authorization.gate import authenticated
from midivault.domain.shared.command import Command, CommandHandler, Result


class ToggleLike(Command):
    record_id: RecordId


class LikeStatus(Result):
    liked: bool
    like_count: int


class ToggleLikeHandler(CommandHandler[ToggleLike, LikeStatus]):
    __auth__ = authenticated()
    identity_provider: IdentityProvider
    catalog_service: CatalogService
    principal: Identity | None = field(default=None, init=False)

    async def run(self, cmd: ToggleLike) -> LikeStatus:
        with logfire.span("ToggleLike", record_id=cmd.record_id):
            outcome = await self.catalog_service.toggle_like(
                user_id_of(self.principal), cmd.record_id
            )
            return LikeStatus(liked=outcome.liked, like_count=outcome.like_count)
