import pytest

from recipe_importer.app.services.recipe_parsing.ingredient_parser import parse_ingredient_line


@pytest.mark.parametrize(
    "line,quantity,unit,name",
    [
        ("1 1/2 cups flour", "1 1/2", "cups", "flour"),
        ("2 cups all-purpose flour", "2", "cups", "all-purpose flour"),
        ("1/2 tsp salt", "1/2", "tsp", "salt"),
        ("1 Tbsp olive oil", "1", "Tbsp", "olive oil"),
        ("2 tablespoons butter", "2", "tablespoons", "butter"),
        ("3 cloves of garlic", "3", "cloves", "garlic"),
        ("500 g pasta", "500", "g", "pasta"),
        ("2 large eggs", "2", "", "large eggs"),
        ("2 tortillas", "2", "", "tortillas"),
        ("1 can chickpeas", "1", "can", "chickpeas"),
        ("1 tbsp. sugar", "1", "tbsp", "sugar"),
        ("8 oz. cream cheese", "8", "oz", "cream cheese"),
        ("salt to taste", "", "", "salt to taste"),
        ("  fresh basil  ", "", "", "fresh basil"),
    ],
)
def test_parse_ingredient_line(line, quantity, unit, name):
    parsed = parse_ingredient_line(line)
    assert (parsed.quantity, parsed.unit, parsed.name) == (quantity, unit, name)


def test_unit_must_be_a_whole_word():
    parsed = parse_ingredient_line("1 garlic bulb")
    assert parsed.unit == ""
    assert parsed.name == "garlic bulb"


@pytest.mark.parametrize("line", ["", "   ", "1/2", "???", "of", None, 12])
def test_parse_ingredient_line_never_raises(line):
    parsed = parse_ingredient_line(line)
    assert isinstance(parsed.name, str)
