"""Main CLI application using Cyclopts."""

import cyclopts

from trackrate.cli.commands import db, server, token

app = cyclopts.App(
    name="trackrate",
    help="TrackRate - collaborative music rating service",
)

app.command(server.app, name="server")
app.command(db.migrate, name="migrate")
app.command(db.reconcile, name="reconcile")
app.command(token.token, name="token")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
