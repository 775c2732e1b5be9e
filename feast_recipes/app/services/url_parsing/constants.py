"""Shared constants for ingredient and recipe parsing."""

# Order matters: longer spellings must precede their prefixes ("cups" before
# "cup" before "c") because matching stops at the first hit.
INGREDIENT_UNITS = (
    # Volume
    "cups",
    "cup",
    "c",
    "tablespoons",
    "tablespoon",
    "tbsp",
    "tbs",
    "tb",
    "teaspoons",
    "teaspoon",
    "tsp",
    "ts",
    "fluid ounces",
    "fluid ounce",
    "fl oz",
    "milliliters",
    "milliliter",
    "ml",
    "liters",
    "liter",
    "l",
    "pints",
    "pint",
    "pt",
    "quarts",
    "quart",
    "qt",
    "gallons",
    "gallon",
    "gal",
    # Weight
    "pounds",
    "pound",
    "lbs",
    "lb",
    "ounces",
    "ounce",
    "oz",
    "kilograms",
    "kilogram",
    "kg",
    "grams",
    "gram",
    "g",
    # Count
    "cloves",
    "clove",
    "slices",
    "slice",
    "pieces",
    "piece",
    "cans",
    "can",
    "bunches",
    "bunch",
    "heads",
    "head",
    "stalks",
    "stalk",
    "sprigs",
    "sprig",
    "packages",
    "package",
    "pkg",
    "pinches",
    "pinch",
    "dashes",
    "dash",
    # Size modifiers that act as units
    "large",
    "medium",
    "small",
)

QUANTITY_CHARS = frozenset("0123456789./-")

DEFAULT_SERVINGS = 4

RECIPE_TYPE = "Recipe"
HOW_TO_STEP_TYPE = "HowToStep"
HOW_TO_SECTION_TYPE = "HowToSection"

FRACTION_MAP = {
    "¼": "1/4",
    "½": "1/2",
    "¾": "3/4",
    "⅐": "1/7",
    "⅑": "1/9",
    "⅒": "1/10",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅕": "1/5",
    "⅖": "2/5",
    "⅗": "3/5",
    "⅘": "4/5",
    "⅙": "1/6",
    "⅚": "5/6",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

FRACTION_CHARS = "".join(FRACTION_MAP.keys())
