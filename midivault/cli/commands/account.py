"""Login, logout and account management."""

import sys

import cyclopts
from rich.prompt import Prompt

from midivault.cli.console import get_console
from midivault.cli.util.runner import run_handler
from midivault.domain.auth.command.delete_account import DeleteAccount, DeleteAccountHandler
from midivault.domain.auth.command.login import Login, LoginHandler, Logout, LogoutHandler
from midivault.domain.auth.query.whoami import WhoAmI, WhoAmIHandler

app = cyclopts.App(name="account", help="Manage your local account")


def login(username: str, /, *, password: str | None = None, yes: bool = False) -> None:
    """Log in, creating the account if the username is new.

    Args:
        username: Account name.
        password: Password (prompted when omitted).
        yes: Create a missing account without asking.
    """
    console = get_console()
    password = password or Prompt.ask("Password", password=True)
    result = run_handler(LoginHandler, Login(username=username, password=password), yes=yes)
    if not result.success:
        console.warning("Registration cancelled")
        sys.exit(1)
    if result.created:
        console.success(f"Created account {result.user_id}")
    console.success(f"Logged in as {result.user_id}")


def logout() -> None:
    """Log out of the current account."""
    run_handler(LogoutHandler, Logout())
    get_console().success("Logged out")


def whoami() -> None:
    """Show the logged-in account."""
    console = get_console()
    result = run_handler(WhoAmIHandler, WhoAmI())
    if result.user_id is None:
        console.info("Not logged in")
        return
    console.print(f"{result.user_id} [dim]<{result.email}>[/dim]")


@app.command
def delete(*, password: str | None = None, yes: bool = False) -> None:
    """Delete the logged-in account. Published records stay listed.

    Args:
        password: Current password (prompted when omitted).
        yes: Skip the confirmation prompt.
    """
    console = get_console()
    password = password or Prompt.ask("Password", password=True)
    result = run_handler(DeleteAccountHandler, DeleteAccount(password=password), yes=yes)
    if result.deleted:
        console.success("Account deleted")
    else:
        console.warning("Aborted")
