"""Dialog descriptions handed to the dialog surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DialogKind(Enum):
    OK = "ok"
    YES_NO = "yes_no"
    CHOICE = "choice"
    USER_SELECTION = "user_selection"


class ButtonType(Enum):
    OK = "OK"
    YES = "YES"
    NO = "NO"
    CANCEL = "CANCEL"


@dataclass
class DialogButton:
    id: str
    label: str
    variant: str = "default"


@dataclass
class DialogConfig:
    kind: DialogKind
    title: str
    message: str = ""
    buttons: list[DialogButton] = field(default_factory=list)
    candidates: list[Any] = field(default_factory=list)
    multiple_selection: bool = False
    validate_button_title: str = ""
