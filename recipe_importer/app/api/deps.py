from recipe_importer.app.services.recipe_parser import RecipeParser, get_recipe_parser


def get_parser() -> RecipeParser:
    return get_recipe_parser()
