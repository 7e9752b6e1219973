#!/usr/bin/env python
"""
Import one recipe from a URL (or pasted text with --text) and print it as JSON.

Run manually:
    python scripts/import_recipe.py https://www.youtube.com/watch?v=...
    python scripts/import_recipe.py --text "2 cups flour, 1 cup sugar, ..."
"""
import asyncio
import json
import logging
import sys

from recipe_importer.app.services import recipe_parser
from recipe_importer.app.services.recipe_parsing.errors import RecipeImportError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("import_recipe")


async def run(args) -> int:
    try:
        if args[0] == "--text":
            recipe = await recipe_parser.parse_recipe_from_text(" ".join(args[1:]))
        else:
            recipe = await recipe_parser.parse_recipe_from_url(args[0])
    except RecipeImportError as exc:
        logger.error("Import failed (%s): %s", exc.error_code, exc.user_message)
        return 1
    print(json.dumps(recipe.to_payload(), indent=2))
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(run(sys.argv[1:])))
