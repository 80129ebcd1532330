"""Main CLI application using Cyclopts.

Each command loads settings, builds the DI container and runs one command
handler to completion.
"""

import cyclopts

from wash import __version__
from wash.cli.commands import par, reg

app = cyclopts.App(
    name="wash",
    help="wasmCloud shell - registry and provider archive tooling",
    version=__version__,
)

app.command(reg.app, name="reg")
app.command(par.app, name="par")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
