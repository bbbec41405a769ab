"""AccountService - local identity collaborator backed by the slot store."""

import logging
from dataclasses import dataclass

from midivault.domain.auth.model.account import Account
from midivault.domain.auth.model.identity import Identity
from midivault.domain.auth.model.value import UserId
from midivault.domain.auth.port.identity_provider import SessionListener
from midivault.domain.shared.error import AuthorizationError, ValidationError
from midivault.domain.shared.port.confirmation import ConfirmationPort
from midivault.domain.shared.port.slot_store import CURRENT_USER_SLOT, USERS_SLOT, SlotStore
from midivault.domain.shared.service import Service

logger = logging.getLogger(__name__)

REGISTER_PROMPT = (
    "Username '{username}' does not exist, a new account will be created.\n"
    "Accounts are stored locally and passwords cannot be recovered. Continue?"
)
DELETE_ACCOUNT_PROMPT = "Delete account '{username}'? This cannot be undone."


@dataclass(frozen=True)
class LoginResult:
    success: bool
    created: bool = False
    identity: Identity | None = None


class AccountService(Service):
    """Registers accounts, tracks the current identity, and removes accounts.

    Satisfies the IdentityProvider port. When a SessionListener is attached it is
    told about every identity change.
    """

    slots: SlotStore
    confirmation: ConfirmationPort
    listener: SessionListener | None = None

    def has_listener(self) -> bool:
        return self.listener is not None

    async def current_identity(self) -> Identity | None:
        doc = await self.slots.read(CURRENT_USER_SLOT)
        if not doc:
            return None
        return Identity.from_document(doc)

    async def identity_exists(self, user_id: UserId) -> bool:
        accounts = await self._accounts()
        return user_id in accounts

    async def login_or_register(self, username: str, password: str) -> LoginResult:
        """Log in, creating the account first (after confirmation) if it does not exist."""
        if not username or not password:
            raise ValidationError("Username and password are required")

        accounts = await self._accounts()
        account = accounts.get(UserId(username))
        created = False

        if account is None:
            if not await self.confirmation.confirm(REGISTER_PROMPT.format(username=username)):
                logger.info("Registration of %s cancelled", username)
                return LoginResult(success=False)
            account = Account.register(UserId(username), password)
            accounts[account.username] = account
            await self._save_accounts(accounts)
            created = True
            logger.info("Registered account %s", username)
        elif not account.check_password(password):
            raise AuthorizationError("Wrong password", code="invalid_credentials")

        identity = account.identity()
        await self.slots.write(CURRENT_USER_SLOT, identity.to_document())
        await self._notify(identity)
        return LoginResult(success=True, created=created, identity=identity)

    async def logout(self) -> None:
        await self.slots.clear(CURRENT_USER_SLOT)
        await self._notify(None)

    async def delete_account(self, password: str) -> bool:
        """Remove the current account after re-checking the password and confirming.

        Records published by the account stay in the catalog; listings flag their owner
        as removed.
        """
        identity = await self.current_identity()
        if identity is None:
            raise AuthorizationError("Login required", code="missing_identity")

        accounts = await self._accounts()
        account = accounts.get(identity.user_id)
        if account is None or not account.check_password(password):
            raise AuthorizationError("Wrong password", code="invalid_credentials")

        if not await self.confirmation.confirm(
            DELETE_ACCOUNT_PROMPT.format(username=identity.user_id)
        ):
            return False

        del accounts[identity.user_id]
        await self._save_accounts(accounts)
        logger.info("Deleted account %s", identity.user_id)
        await self.logout()
        return True

    async def _accounts(self) -> dict[UserId, Account]:
        doc = await self.slots.read(USERS_SLOT) or {}
        return {
            UserId(name): Account.model_validate({"username": name, **data})
            for name, data in doc.items()
        }

    async def _save_accounts(self, accounts: dict[UserId, Account]) -> None:
        await self.slots.write(
            USERS_SLOT,
            {name: account.to_document() for name, account in accounts.items()},
        )

    async def _notify(self, identity: Identity | None) -> None:
        if self.has_listener():
            await self.listener.identity_changed(identity)  # type: ignore[union-attr]
