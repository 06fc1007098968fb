"""CLI commands for CSV RSVP management."""

import httpx
import typer

from src.config.settings import settings
from src.rsvps.repository.csv_store import CsvRecordStore

app = typer.Typer(help="CLI commands for CSV RSVP management")


def _csv_option() -> str:
    return typer.Option(
        settings.csv_path,
        "--csv",
        "-c",
        help="CSV file holding the RSVPs",
    )


@app.command()
def serve(
    host: str = typer.Option(settings.app_host, "--host", help="Address to bind"),
    port: int = typer.Option(settings.app_port, "--port", help="Port to bind"),
    csv: str = _csv_option(),
    test: bool = typer.Option(
        False,
        "--test",
        "-t",
        help="Test mode, logs notification emails instead of sending them",
    ),
):
    """Run the RSVP web server."""
    import uvicorn

    settings.csv_path = csv
    if test:
        settings.test_mode = True

    typer.secho(f"Serving RSVPs from {csv} on http://{host}:{port}", fg=typer.colors.GREEN)
    uvicorn.run("src.main:app", host=host, port=port)


@app.command()
def add_invitee(
    name: str = typer.Argument(..., help="New person's name"),
    email: str = typer.Argument(..., help="New person's email address"),
    plus_one: str = typer.Option("", "--plus-one", "-p", help="New person's plus one's name"),
    url: str = typer.Option(
        f"http://{settings.app_host}:{settings.app_port}",
        "--url",
        "-u",
        help="URL of the RSVP web server",
    ),
):
    """Add a new person to the RSVP list of a running server."""
    try:
        response = httpx.post(
            f"{url}/api/v1/invitees",
            json={"name": name, "email": email, "plus_one_name": plus_one},
        )
    except httpx.HTTPError as e:
        typer.secho(f"Could not reach {url}: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)

    if response.status_code == 409:
        typer.secho(f"{name} is already on the list", fg=typer.colors.YELLOW)
        raise typer.Exit(1)
    if response.is_error:
        typer.secho(f"Server returned {response.status_code}: {response.text}", fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Invitee added!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {name}", fg=typer.colors.BLUE)
    typer.secho(f"  Email: {email}", fg=typer.colors.BLUE)
    if plus_one:
        typer.secho(f"  Plus one: {plus_one}", fg=typer.colors.BLUE)


@app.command("list")
def list_rsvps(csv: str = _csv_option()):
    """Show every RSVP in the file."""
    with CsvRecordStore.open(csv) as store:
        records = store.list_all()

    if not records:
        typer.secho("No RSVPs yet", fg=typer.colors.YELLOW)
        return

    for record in records:
        status = "attending" if record.attending else "not attending"
        color = typer.colors.GREEN if record.attending else typer.colors.RED
        typer.secho(f"{record.name} <{record.email}> - {status}", fg=color)
        if record.plus_one_name:
            plus_one = "attending" if record.plus_one_attending else "not attending"
            typer.secho(f"  + {record.plus_one_name} - {plus_one}", fg=typer.colors.BLUE)
    typer.echo()
    typer.secho(f"{len(records)} RSVPs", fg=typer.colors.CYAN)


@app.command()
def attendance(csv: str = _csv_option()):
    """Show head counts per event, plus-ones included."""
    with CsvRecordStore.open(csv) as store:
        totals = store.aggregate()

    typer.secho("Attendance", fg=typer.colors.GREEN)
    typer.secho(f"  Main event: {totals.attending}", fg=typer.colors.BLUE)
    typer.secho(f"  Second event: {totals.attending_secondary}", fg=typer.colors.BLUE)
    typer.secho(f"  Third event: {totals.attending_tertiary}", fg=typer.colors.BLUE)


@app.command()
def dump(csv: str = _csv_option()):
    """Print the raw CSV file."""
    with CsvRecordStore.open(csv) as store:
        typer.echo(store.dump(), nl=False)


@app.command()
def remove(
    name: str = typer.Argument(..., help="Name of the guest to remove"),
    csv: str = _csv_option(),
):
    """Remove a guest's RSVP from the file."""
    with CsvRecordStore.open(csv) as store:
        record = store.remove(name)

    if record is None:
        typer.secho(f"No RSVP found for {name}", fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(f"Removed {record.name}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
