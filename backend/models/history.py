from pydantic import BaseModel, ConfigDict, Field


class HistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    timestamp: int  # epoch millis
    prompt: str
    image_url: str = Field(..., alias="imageUrl")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class CreateHistoryPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(..., min_length=1)
    image_url: str = Field(..., alias="imageUrl", min_length=1)
