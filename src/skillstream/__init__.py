"""Top-level package for skillstream."""

import typer

app = typer.Typer()

# Import submodules at the end to register their commands
from skillstream import (  # noqa: E402
    skillshare,  # noqa: F401
)

if __name__ == "__main__":
    app()
