from typing import List

from pydantic import BaseModel, ConfigDict, Field


class DuplicateEntry(BaseModel):
    name: str
    existing_id: int = Field(serialization_alias="existingId")

    model_config = ConfigDict(populate_by_name=True)


class ImportReport(BaseModel):
    added: int = 0
    skipped: int = 0
    duplicates: List[DuplicateEntry] = Field(default_factory=list)

    def add_duplicate(self, name: str, existing_id: int) -> None:
        self.duplicates.append(DuplicateEntry(name=name, existing_id=existing_id))
        self.skipped += 1
