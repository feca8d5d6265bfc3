from enum import Enum

from pydantic import BaseModel, ConfigDict


class CardInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    position: str = ""
    phone: str = ""


class Stage(str, Enum):
    FORM = "form"
    PREVIEW = "preview"


class AppState(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: Stage = Stage.FORM
    card: CardInfo = CardInfo()
