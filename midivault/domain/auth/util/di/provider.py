from dishka import provide

from midivault.domain.auth.command.delete_account import DeleteAccountHandler
from midivault.domain.auth.command.login import LoginHandler, LogoutHandler
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.auth.query.whoami import WhoAmIHandler
from midivault.domain.auth.service.account import AccountService
from midivault.domain.shared.port.confirmation import ConfirmationPort
from midivault.domain.shared.port.slot_store import SlotStore
from midivault.util.di.base import Provider
from midivault.util.di.scope import Scope


class AuthProvider(Provider):
    @provide(scope=Scope.APP)
    def get_account_service(
        self, slots: SlotStore, confirmation: ConfirmationPort
    ) -> AccountService:
        return AccountService(slots=slots, confirmation=confirmation)

    @provide(scope=Scope.APP)
    def get_identity_provider(self, accounts: AccountService) -> IdentityProvider:
        return accounts

    # Command Handlers
    login_handler = provide(LoginHandler, scope=Scope.UOW)
    logout_handler = provide(LogoutHandler, scope=Scope.UOW)
    delete_account_handler = provide(DeleteAccountHandler, scope=Scope.UOW)

    # Query Handlers
    whoami_handler = provide(WhoAmIHandler, scope=Scope.UOW)
