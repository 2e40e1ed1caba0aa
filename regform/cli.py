"""CLI for the regform registration form."""

import logging
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from regform import __version__
from regform.client import RegistrationClient
from regform.config import (
    ConfigError,
    Settings,
    get_config_path,
    get_regform_home,
    load_settings,
)
from regform.render import render_form
from regform.schema.fields import FORM_FIELDS, FieldSpec
from regform.schema.rules import AGREEMENT, FAV_FOOD, FAV_LANGUAGE, USERNAME
from regform.state import FieldEvent, FormState, change_field
from regform.submission import submit

app = typer.Typer(
    name="regform",
    help="Terminal registration form.",
    no_args_is_help=True,
)
console = Console()

UsernameOption = Annotated[str, typer.Option("--username", "-u", help="Username (3-20 characters)")]
LanguageOption = Annotated[
    str, typer.Option("--fav-language", "-l", help="Favorite language: javascript or rust")
]
FoodOption = Annotated[
    str, typer.Option("--fav-food", "-f", help="Favorite food: broccoli, spaghetti or pizza")
]
AgreeOption = Annotated[bool, typer.Option("--agree/--no-agree", help="Agree to our terms")]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"regform version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """regform: fill in and submit the registration form."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


def create_client(settings: Settings) -> RegistrationClient:
    return RegistrationClient.from_settings(settings)


def _resolve_settings(endpoint: str | None, timeout: float | None) -> Settings:
    try:
        return load_settings(endpoint=endpoint, timeout=timeout)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def build_state(username: str, fav_language: str, fav_food: str, agree: bool) -> FormState:
    """Fill a fresh form the way a user would, one widget at a time."""
    state = FormState.initial()
    for event in (
        FieldEvent(name=USERNAME, kind="text", value=username),
        FieldEvent(name=FAV_LANGUAGE, kind="radio", value=fav_language),
        FieldEvent(name=FAV_FOOD, kind="select", value=fav_food),
        FieldEvent(name=AGREEMENT, kind="checkbox", checked=agree),
    ):
        state = change_field(state, event)
    return state


def _submit_and_show(state: FormState, settings: Settings) -> FormState:
    with create_client(settings) as client:
        with console.status("Submitting registration..."):
            state = submit(state, client)
    console.print(render_form(state))
    return state


@app.command()
def check(
    username: UsernameOption = "",
    fav_language: LanguageOption = "",
    fav_food: FoodOption = "",
    agree: AgreeOption = False,
) -> None:
    """Validate the form without submitting it.

    Exits with status 1 when the form is not valid.
    """
    state = build_state(username, fav_language, fav_food, agree)
    console.print(render_form(state))

    if not state.enabled:
        raise typer.Exit(1)


@app.command("submit")
def submit_command(
    username: UsernameOption = "",
    fav_language: LanguageOption = "",
    fav_food: FoodOption = "",
    agree: AgreeOption = False,
    endpoint: Annotated[
        str | None,
        typer.Option("--endpoint", "-e", help="Registration endpoint URL"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Request timeout in seconds"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Submit even if the form is not valid"),
    ] = False,
) -> None:
    """Fill in the form from options and submit it.

    The endpoint's message is shown as a banner. Exits with status 1 when
    the form is invalid (unless --force) or the registration fails.
    """
    settings = _resolve_settings(endpoint, timeout)
    state = build_state(username, fav_language, fav_food, agree)

    if not state.enabled and not force:
        console.print(render_form(state))
        console.print("\n[red]Error:[/red] Form is not valid; submit is disabled (use --force to send anyway)")
        raise typer.Exit(1)

    state = _submit_and_show(state, settings)
    if state.outcome.failure_message is not None:
        raise typer.Exit(1)


def _prompt_value(spec: FieldSpec, current: str | bool) -> FieldEvent:
    label = spec.label.rstrip(":")

    if spec.kind == "checkbox":
        checked = typer.confirm(label, default=bool(current))
        return FieldEvent(name=spec.name, kind="checkbox", checked=checked)

    if spec.options:
        choices = "/".join(option.value for option in spec.options if option.value)
        label = f"{label} ({choices})"

    value = typer.prompt(label, default=current, show_default=bool(current))
    return FieldEvent(name=spec.name, kind=spec.kind, value=value)


def prompt_fields(state: FormState) -> FormState:
    """Ask for every field, re-asking text and choice fields while they show an error.

    A checkbox is asked once; declining it leaves the form invalid.
    """
    for spec in FORM_FIELDS:
        while True:
            event = _prompt_value(spec, state.values.get(spec.name))
            state = change_field(state, event)
            error = state.errors.get(spec.name)
            if error:
                console.print(f"  [red]{error}[/red]")
            if not error or spec.kind == "checkbox":
                break
    return state


@app.command()
def register(
    endpoint: Annotated[
        str | None,
        typer.Option("--endpoint", "-e", help="Registration endpoint URL"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Request timeout in seconds"),
    ] = None,
) -> None:
    """Fill in the form interactively and submit it.

    When the endpoint rejects the registration the entered values are kept
    and can be edited and resubmitted.
    """
    settings = _resolve_settings(endpoint, timeout)
    state = FormState.initial()
    console.print(render_form(state))

    while True:
        state = prompt_fields(state)
        console.print(render_form(state))

        if not state.enabled:
            if typer.confirm("Form is not valid. Edit it again?", default=True):
                continue
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(1)

        if not typer.confirm("Submit registration?", default=True):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(1)

        state = _submit_and_show(state, settings)
        if state.outcome.success_message is not None:
            return

        if not typer.confirm("Edit and resubmit?", default=True):
            raise typer.Exit(1)


@app.command()
def init(
    endpoint: Annotated[
        str | None,
        typer.Option("--endpoint", "-e", help="Registration endpoint URL to store"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Request timeout in seconds to store"),
    ] = None,
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Write the global config file.

    Creates:
      ~/.config/regform/config.yaml  (or $REGFORM_HOME/config.yaml)
    """
    home = get_regform_home()
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(f"[yellow]Warning:[/yellow] Config already exists at {escape(str(config_path))}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    # Validate before writing
    defaults = Settings()
    try:
        settings = Settings(
            endpoint=endpoint or defaults.endpoint,
            timeout=timeout if timeout is not None else defaults.timeout,
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    home.mkdir(parents=True, exist_ok=True)
    config = {"endpoint": settings.endpoint, "timeout": settings.timeout}
    with open(config_path, "w") as f:
        yaml.dump(config, f, sort_keys=False)

    console.print(f"[green]✓[/green] Created config at {escape(str(config_path))}")


@app.command()
def config() -> None:
    """Show the resolved settings."""
    settings = _resolve_settings(None, None)

    console.print("[bold]regform settings[/bold]")
    console.print(f"  Endpoint: {escape(settings.endpoint)}")
    console.print(f"  Timeout: {settings.timeout}s")
    console.print(f"  Config file: {escape(str(settings.config_path or 'none'))}")


if __name__ == "__main__":
    app()
