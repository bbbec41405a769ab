from midivault.domain.auth.model.value import UserId
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.shared.authorization.gate import public
from midivault.domain.shared.query import Query, QueryHandler, Result


class WhoAmI(Query):
    pass


class CurrentUser(Result):
    user_id: UserId | None = None
    email: str | None = None


class WhoAmIHandler(QueryHandler[WhoAmI, CurrentUser]):
    __auth__ = public()
    identity_provider: IdentityProvider

    async def run(self, cmd: WhoAmI) -> CurrentUser:
        identity = await self.identity_provider.current_identity()
        if identity is None:
            return CurrentUser()
        return CurrentUser(user_id=identity.user_id, email=identity.email)
