"""Tunable vocabularies and thresholds used by the recipe extractors."""

import re

# Words that mark a line as a measured quantity.
MEASUREMENT_WORDS = (
    "cup",
    "cups",
    "tbsp",
    "tsp",
    "tablespoon",
    "teaspoon",
    "oz",
    "ounce",
    "pound",
    "lb",
    "gram",
    "kg",
    "ml",
    "liter",
    "pinch",
    "dash",
    "clove",
    "bunch",
    "can",
    "package",
    "pkg",
    "bag",
    "slice",
    "piece",
    "whole",
    "half",
    "quarter",
    "large",
    "medium",
    "small",
    "fresh",
    "dried",
    "minced",
    "chopped",
    "diced",
)

COMMON_INGREDIENT_WORDS = (
    "salt",
    "pepper",
    "oil",
    "butter",
    "garlic",
    "onion",
    "sugar",
    "flour",
    "egg",
    "milk",
    "cream",
    "cheese",
    "chicken",
    "beef",
    "pork",
    "fish",
    "rice",
    "pasta",
    "tomato",
    "lemon",
    "herb",
    "spice",
    "sauce",
    "vinegar",
    "broth",
    "stock",
    "water",
)

MEASUREMENT_RE = re.compile(r"\b(" + "|".join(MEASUREMENT_WORDS) + r")\b", re.I)
COMMON_INGREDIENT_RE = re.compile(r"\b(" + "|".join(COMMON_INGREDIENT_WORDS) + r")\b", re.I)

# Exclusive length bounds for heuristic list items.
INGREDIENT_MIN_CHARS = 3
INGREDIENT_MAX_CHARS = 200
INSTRUCTION_MIN_CHARS = 10
INSTRUCTION_MAX_CHARS = 1000

MIN_USABLE_ITEMS = 2

LLM_EXCERPT_CHARS = 4000

PLACEHOLDER_RECIPE_NAME = "Imported Recipe"

JSON_LD_MEDIA_TYPE = "application/ld+json"
MICRODATA_RECIPE_TYPE_RE = re.compile(r"schema\.org/Recipe", re.I)
