"""Terminal rendering of the registration form."""

from rich.console import Console, Group, RenderableType
from rich.text import Text

from regform.schema.fields import FORM_FIELDS, FORM_TITLE, SUBMIT_LABEL, FieldSpec
from regform.state.models import FormState


def render_banner(state: FormState) -> Text | None:
    """Success or failure banner for the last submission, if any."""
    outcome = state.outcome
    if outcome.success_message:
        return Text(outcome.success_message, style="bold green")
    if outcome.failure_message:
        return Text(outcome.failure_message, style="bold red")
    return None


def _render_input(spec: FieldSpec, value: str | bool) -> list[Text]:
    if spec.kind == "text":
        line = Text(f"{spec.label} ", style="bold")
        if value:
            line.append(str(value))
        else:
            line.append(spec.placeholder or "", style="dim")
        return [line]

    if spec.kind == "radio":
        lines = [Text(spec.label, style="bold")]
        for option in spec.options:
            marker = "(*)" if value == option.value else "( )"
            lines.append(Text(f"  {marker} {option.label}"))
        return lines

    if spec.kind == "select":
        line = Text(f"{spec.label} ", style="bold")
        label = spec.option_label(str(value))
        line.append(label if label is not None else str(value))
        return [line]

    marker = "[x]" if value is True else "[ ]"
    return [Text(f"{marker} {spec.label}")]


def render_form(state: FormState) -> RenderableType:
    """Build the renderable for the whole form.

    Args:
        state: The form state to show.

    Returns:
        A rich Group: title, banner, fields with inline errors, submit control.
    """
    parts: list[RenderableType] = [Text(FORM_TITLE, style="bold underline")]

    banner = render_banner(state)
    if banner is not None:
        parts.append(banner)

    for spec in FORM_FIELDS:
        parts.extend(_render_input(spec, state.values.get(spec.name)))
        error = state.errors.get(spec.name)
        if error:
            parts.append(Text(f"  {error}", style="red"))

    submit = Text(f"[ {SUBMIT_LABEL} ]", style="bold" if state.enabled else "dim")
    if not state.enabled:
        submit.append(" (disabled)", style="dim")
    parts.append(submit)

    return Group(*parts)


def render_text(state: FormState, width: int = 80) -> str:
    """Render the form as plain text, without colors or styles."""
    console = Console(width=width, color_system=None, force_terminal=False)
    with console.capture() as capture:
        console.print(render_form(state))
    return capture.get()
