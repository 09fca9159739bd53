from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Recipe(BaseModel):
    """Canonical imported recipe, serialized with camelCase keys."""

    name: str
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    total_time: Optional[int] = None
    servings: Optional[int] = None
    image: str = ""
    cuisine: str = ""
    category: str = ""
    calories: Optional[int] = None
    source_url: str
    imported_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ImportUrlRequest(BaseModel):
    url: str


class ImportErrorResponse(BaseModel):
    error_code: str
    message: str
