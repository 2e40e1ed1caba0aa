"""Layout of the registration form: labels, widget kinds and options."""

from typing import Literal

from pydantic import BaseModel, Field

from regform.schema.rules import AGREEMENT, FAV_FOOD, FAV_LANGUAGE, USERNAME

WidgetKind = Literal["text", "radio", "select", "checkbox"]


class FieldOption(BaseModel):
    """A selectable value of a radio or select field."""

    value: str
    label: str


class FieldSpec(BaseModel):
    """How one form field is presented."""

    name: str
    label: str
    kind: WidgetKind
    placeholder: str | None = None
    options: list[FieldOption] = Field(default_factory=list)

    def option_label(self, value: str) -> str | None:
        """Get the label of an option by its value."""
        for option in self.options:
            if option.value == value:
                return option.label
        return None


FORM_TITLE = "Create an Account"
SUBMIT_LABEL = "Submit"

FORM_FIELDS: list[FieldSpec] = [
    FieldSpec(
        name=USERNAME,
        label="Username:",
        kind="text",
        placeholder="Type Username",
    ),
    FieldSpec(
        name=FAV_LANGUAGE,
        label="Favorite Language:",
        kind="radio",
        options=[
            FieldOption(value="javascript", label="JavaScript"),
            FieldOption(value="rust", label="Rust"),
        ],
    ),
    FieldSpec(
        name=FAV_FOOD,
        label="Favorite Food:",
        kind="select",
        options=[
            FieldOption(value="", label="-- Select Favorite Food --"),
            FieldOption(value="pizza", label="Pizza"),
            FieldOption(value="spaghetti", label="Spaghetti"),
            FieldOption(value="broccoli", label="Broccoli"),
        ],
    ),
    FieldSpec(
        name=AGREEMENT,
        label="Agree to our terms",
        kind="checkbox",
    ),
]


def get_field(name: str) -> FieldSpec | None:
    """Get a field's layout by its wire name."""
    for spec in FORM_FIELDS:
        if spec.name == name:
            return spec
    return None
