"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .readme import update_readme
from .review import review

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="github-actions-ai",
    help="README issue sections and AI code review for GitHub Actions",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(
    name="update-readme", context_settings={"help_option_names": ["-h", "--help"]}
)(update_readme)
app.command(name="review", context_settings={"help_option_names": ["-h", "--help"]})(
    review
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_actions_ai import __version__

    console.print(f"GitHub Actions AI v{__version__}")


if __name__ == "__main__":
    app()
