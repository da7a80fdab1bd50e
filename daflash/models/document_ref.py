"""Identity of a record shown in the back office.

Records either live in the store (``PersistedRef``) or are built-in
placeholders served while the store is empty (``PlaceholderRef``).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class PersistedRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["persisted"] = "persisted"
    uuid: str


class PlaceholderRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["placeholder"] = "placeholder"
    key: str


DocumentRef = Annotated[Union[PersistedRef, PlaceholderRef], Field(discriminator="kind")]
