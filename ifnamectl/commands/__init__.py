import typer

from ifnamectl.errors import IfnamectlError, exit_code_for


def fail(error: IfnamectlError) -> None:
    """Report a domain error and exit with the status mapped to its type."""
    typer.echo(f"❌ {error}", err=True)
    raise typer.Exit(code=exit_code_for(error))
