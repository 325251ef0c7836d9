"""Immutable descriptions of form fields, table columns and row actions.

These are plain values handed to the UI renderer. Nothing here knows about
principals or the database.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class FieldComponent(str, Enum):
    TEXT_INPUT = "text_input"
    TEXTAREA = "textarea"
    FILE_UPLOAD = "file_upload"
    DATE_PICKER = "date_picker"
    SELECT = "select"
    HIDDEN = "hidden"


class ColumnKind(str, Enum):
    IMAGE = "image"
    TEXT = "text"


@dataclass(frozen=True)
class FieldOption:
    value: Any
    label: str


@dataclass(frozen=True)
class FieldSpec:
    """One form field.

    `editable` is False for fields whose value is fixed by the server, in
    which case `default` is the value that will be stored.
    `relationship` names the relation and label attribute a select draws
    its options from; `options` holds the resolved choices when known.
    """
    name: str
    component: FieldComponent
    required: bool = False
    editable: bool = True
    default: Any = None
    max_length: Optional[int] = None
    numeric: bool = False
    prefix: Optional[str] = None
    input_mode: Optional[str] = None
    image_only: bool = False
    relationship: Optional[Tuple[str, str]] = None
    options: Tuple[FieldOption, ...] = ()


@dataclass(frozen=True)
class ColumnSpec:
    """One table column; `format` is "money", "date" or None."""
    name: str
    kind: ColumnKind = ColumnKind.TEXT
    sortable: bool = False
    searchable: bool = False
    visible: bool = True
    format: Optional[str] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class ActionSpec:
    name: str
    label: str
