from dataclasses import field

import logfire

from midivault.domain.auth.model.identity import Identity
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.auth.service.account import AccountService
from midivault.domain.shared.authorization.gate import authenticated
from midivault.domain.shared.command import Command, CommandHandler, Result


class DeleteAccount(Command):
    password: str


class AccountDeleted(Result):
    deleted: bool


class DeleteAccountHandler(CommandHandler[DeleteAccount, AccountDeleted]):
    __auth__ = authenticated()
    identity_provider: IdentityProvider
    account_service: AccountService
    principal: Identity | None = field(default=None, init=False)

    async def run(self, cmd: DeleteAccount) -> AccountDeleted:
        with logfire.span("DeleteAccount"):
            deleted = await self.account_service.delete_account(cmd.password)
            return AccountDeleted(deleted=deleted)
