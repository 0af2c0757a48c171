"""
Declarative form schemas.

A `FormSchema` is the single description of a page's form: the templates render
inputs from it and `validate_values` maps the input contract's errors back onto it.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from shortcut_core.capabilities.models import InputContract

FORM_ERROR = "__form__"


class FieldKind(str, Enum):
    TEXT = "text"
    URL = "url"
    TEXTAREA = "textarea"
    SELECT = "select"
    URL_LIST = "url_list"


class FormField(BaseModel):
    name: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    placeholder: str = ""
    default: Union[str, List[str]] = ""
    options: List[str] = Field(default_factory=list)
    # Blank submissions become None instead of ""
    optional: bool = False
    # Shown instead of the validator's own message
    message: Optional[str] = None
    help: str = ""

    @property
    def alias(self) -> str:
        return to_camel(self.name)


class FormSchema(BaseModel):
    inputs: List[FormField]
    submit_label: str

    def defaults(self) -> Dict[str, Any]:
        return {f.name: list(f.default) if isinstance(f.default, list) else f.default for f in self.inputs}

    def read(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        """Pulls this schema's fields out of submitted form data."""
        values: Dict[str, Any] = {}
        for f in self.inputs:
            if f.kind == FieldKind.URL_LIST:
                if hasattr(form, "getlist"):
                    raw = form.getlist(f.name)
                else:
                    raw = form.get(f.name) or []
                    if isinstance(raw, str):
                        raw = [raw]
                values[f.name] = [str(v).strip() for v in raw if str(v).strip()]
                continue

            value = form.get(f.name)
            value = "" if value is None else str(value)
            if f.optional and not value.strip():
                values[f.name] = None
            else:
                values[f.name] = value
        return values

    def display_values(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Values to echo back into the rendered inputs."""
        shown = self.defaults()
        for f in self.inputs:
            if f.name not in values:
                continue
            value = values[f.name]
            if f.kind == FieldKind.URL_LIST:
                shown[f.name] = list(value) or [""]
            else:
                shown[f.name] = "" if value is None else value
        return shown

    def validate_values(
        self, values: Mapping[str, Any], input_model: Type[InputContract]
    ) -> Tuple[Optional[InputContract], Dict[str, str]]:
        """Returns the input record, or None plus one inline error per offending field."""
        try:
            return input_model.model_validate(dict(values)), {}
        except ValidationError as e:
            return None, self._field_errors(e)

    def _field_errors(self, error: ValidationError) -> Dict[str, str]:
        lookup: Dict[str, FormField] = {}
        for f in self.inputs:
            lookup[f.name] = f
            lookup[f.alias] = f

        errors: Dict[str, str] = {}
        for err in error.errors():
            loc = err.get("loc") or ()
            target = lookup.get(str(loc[0])) if loc else None
            if target is None:
                errors.setdefault(FORM_ERROR, err["msg"])
                continue
            errors.setdefault(target.name, target.message or err["msg"])
        return errors
