from typing import Optional

from pydantic import BaseModel, Field


class FolderCreate(BaseModel):
    folder_name: Optional[str] = Field(None, alias="folderName")

    model_config = {"populate_by_name": True}
