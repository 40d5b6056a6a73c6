from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from typing import Any, Optional, Union
import datetime

from ...common.schemas import CamelModel

Markup = Union[StrictInt, StrictFloat]


class StoreSettingsPatch(BaseModel):
    """A partial settings map.

    The markup keys are typed so non-numeric values are rejected up front and
    numbers keep the type they were sent with. The bounds may be omitted but
    never cleared. Every other key is accepted as-is and merged verbatim.
    """
    minimum_markup: Markup = Field(None, alias="minimumMarkup")
    maximum_markup: Markup = Field(None, alias="maximumMarkup")
    default_markup: Optional[Markup] = Field(None, alias="defaultMarkup")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_settings(self) -> dict[str, Any]:
        """Returns only the keys the caller sent, under their wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class StoreSettingsUpdateRequest(BaseModel):
    settings: StoreSettingsPatch


class StorePublicSchema(CamelModel):
    public_id: str = Field(..., description="Public KSUID of the store")
    name: str
    settings: dict[str, Any]
    created_at: datetime.datetime
    updated_at: datetime.datetime
