"""Pydantic models for URL recipe parsing."""

from typing import List, Optional

from pydantic import BaseModel, Field

from tavola_recipes.app.services.url_parsing.constants import MIN_USABLE_ITEMS


class RecipeCandidate(BaseModel):
    """An unvalidated recipe as produced by one extractor, before normalization."""

    name: str = ""
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    total_time: Optional[int] = None
    servings: Optional[int] = None
    image: Optional[str] = None
    cuisine: str = ""
    category: str = ""
    calories: Optional[int] = None

    def is_usable(self) -> bool:
        """A candidate stops the cascade only if it carries some real content."""
        return (
            bool(self.name.strip())
            or len(self.ingredients) >= MIN_USABLE_ITEMS
            or len(self.instructions) >= MIN_USABLE_ITEMS
        )


class ExtractionResult(BaseModel):
    """Outcome of running the extractor cascade over one page."""

    found: bool
    candidate: Optional[RecipeCandidate] = None
    parser_strategy: Optional[str] = None
    used_llm: bool = False
