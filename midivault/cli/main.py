"""Main CLI application using Cyclopts.

Every command builds a container, runs one handler and exits.
"""

import cyclopts

from midivault import __version__
from midivault.cli.commands import account, catalog, maintenance, notifications

app = cyclopts.App(
    name="midivault",
    help="midivault - publish and share MIDI files locally",
    version=__version__,
)

app.command(account.login, name="login")
app.command(account.logout, name="logout")
app.command(account.whoami, name="whoami")
app.command(account.app, name="account")

app.command(catalog.publish, name="publish")
app.command(catalog.list_records, name="list")
app.command(catalog.search, name="search")
app.command(catalog.show, name="show")
app.command(catalog.like, name="like")
app.command(catalog.delete, name="delete")
app.command(catalog.download, name="download")

app.command(notifications.inbox, name="inbox")
app.command(maintenance.app, name="maintenance")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
