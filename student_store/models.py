from pydantic import BaseModel, Field


class RecordId(BaseModel):
    name: str = Field(min_length=1)


class Record(RecordId):
    branch: str
