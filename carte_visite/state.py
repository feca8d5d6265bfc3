from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Union

from carte_visite.models import AppState, CardInfo, Stage

logger = logging.getLogger(__name__)

CARD_FIELDS = ("name", "position", "phone")
PHONE_PATTERN = re.compile(r"[0-9]{8}")


@dataclass(frozen=True)
class FieldEdited:
    field: str
    value: str


@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class EditRequested:
    pass


Action = Union[FieldEdited, Submitted, EditRequested]


def constraint_violations(card: CardInfo) -> List[str]:
    """Names of the fields that would fail the form's native input constraints."""
    violations = []
    if not card.name:
        violations.append("name")
    if not card.position:
        violations.append("position")
    if not PHONE_PATTERN.fullmatch(card.phone):
        violations.append("phone")
    return violations


def reduce(state: AppState, action: Action) -> AppState:
    if isinstance(action, FieldEdited):
        if action.field not in CARD_FIELDS:
            raise ValueError(f"Unknown card field: {action.field!r}")
        if state.stage is not Stage.FORM:
            return state
        card = state.card.model_copy(update={action.field: action.value})
        return state.model_copy(update={"card": card})

    if isinstance(action, Submitted):
        if state.stage is not Stage.FORM or constraint_violations(state.card):
            return state
        return state.model_copy(update={"stage": Stage.PREVIEW})

    if isinstance(action, EditRequested):
        if state.stage is not Stage.PREVIEW:
            return state
        return state.model_copy(update={"stage": Stage.FORM})

    raise TypeError(f"Unsupported action: {action!r}")


class CardStore:
    """Owns the single application state; dispatch() is the only way to change it."""

    def __init__(self, state: AppState | None = None):
        self._state = state or AppState()

    def snapshot(self) -> AppState:
        return self._state

    def dispatch(self, action: Action) -> AppState:
        previous = self._state
        self._state = reduce(previous, action)
        if self._state.stage is not previous.stage:
            logger.debug("Stage %s -> %s", previous.stage.value, self._state.stage.value)
        return self._state
