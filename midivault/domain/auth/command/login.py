import logfire

from midivault.domain.auth.model.value import UserId
from midivault.domain.auth.service.account import AccountService
from midivault.domain.shared.authorization.gate import public
from midivault.domain.shared.command import Command, CommandHandler, Result


class Login(Command):
    username: str
    password: str


class LoginOutcome(Result):
    success: bool
    created: bool = False
    user_id: UserId | None = None


class LoginHandler(CommandHandler[Login, LoginOutcome]):
    """Log in, registering the account first when the username is new."""

    __auth__ = public()
    account_service: AccountService

    async def run(self, cmd: Login) -> LoginOutcome:
        with logfire.span("Login", username=cmd.username):
            result = await self.account_service.login_or_register(cmd.username, cmd.password)
            return LoginOutcome(
                success=result.success,
                created=result.created,
                user_id=result.identity.user_id if result.identity else None,
            )


class Logout(Command):
    pass


class LoggedOut(Result):
    pass


class LogoutHandler(CommandHandler[Logout, LoggedOut]):
    __auth__ = public()
    account_service: AccountService

    async def run(self, cmd: Logout) -> LoggedOut:
        await self.account_service.logout()
        return LoggedOut()
