"""Messages exchanged with the display and export collaborators."""

from typing import List, Literal

import ulid
from pydantic import BaseModel, ConfigDict, Field

# Channel names the collaborators report back on.
DISPLAY_CHANNEL = "listClicked"
WORKER_CHANNEL = "workerDone"


class DisplayRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    formulas: List[str] = Field(default_factory=list)


class ExportRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    formula: str
    requestId: str = Field(default_factory=lambda: f"r_{ulid.new()}")


class ItemSelected(BaseModel):
    index: int = Field(ge=0, strict=True)


class RenderComplete(BaseModel):
    requestId: str
    token: Literal["done"] = "done"


class ExportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    requestId: str
    data: bytes
    width: float
    height: float
    usedDefaultRect: bool = False
