"""Constants shared by the recipe parsing pipeline."""

DEFAULT_RECIPE_TITLE = "Imported Recipe"

# Transcripts at or below this length are treated as noise.
MIN_TRANSCRIPT_CHARS = 50
# Minimum usable text for an AI extraction (video content or pasted text).
MIN_CONTENT_CHARS = 20

MAX_PAGE_TEXT_CHARS = 8000
MAX_PAGE_IMAGES = 5

PLATFORM_DOMAINS = {
    "tiktok": ("tiktok.com",),
    "instagram": ("instagram.com", "instagr.am"),
    "youtube": ("youtube.com", "youtu.be"),
}

# Regex alternatives, longest spellings first so "tablespoons" wins over "t".
UNIT_PATTERNS = (
    "cups?",
    "tbsp",
    "tablespoons?",
    "tsp",
    "teaspoons?",
    "oz",
    "ounces?",
    "lbs?",
    "pounds?",
    "g",
    "grams?",
    "kg",
    "kilograms?",
    "ml",
    "milliliters?",
    "l",
    "liters?",
    "pinch",
    "dash",
    "cloves?",
    "slices?",
    "pieces?",
    "bunch",
    "bunches",
    "heads?",
    "stalks?",
    "sprigs?",
    "can",
    "cans",
    "package",
    "packages",
    "bag",
    "bags",
)

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": "https://www.google.com/",
    "Connection": "keep-alive",
}
