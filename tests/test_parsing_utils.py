from tavola_recipes.app.services.url_parsing.parsing_utils import (
    clean_text,
    coerce_text_list,
    extract_instruction_text,
    looks_like_ingredient,
    parse_calories,
    parse_duration,
    parse_image,
    parse_servings,
)


def test_parse_duration_iso():
    assert parse_duration("PT1H30M") == 90
    assert parse_duration("PT45S") == 1
    assert parse_duration("PT0H0M0S") == 0
    assert parse_duration("PT15M") == 15
    assert parse_duration("pt2h") == 120
    assert parse_duration("PT1M30S") == 2
    assert parse_duration("P1DT2H") == 26 * 60


def test_parse_duration_plain_values():
    assert parse_duration(25) == 25
    assert parse_duration("40") == 40
    assert parse_duration("15 minutes") == 15


def test_parse_duration_invalid():
    assert parse_duration(None) is None
    assert parse_duration("") is None
    assert parse_duration("garbage") is None
    assert parse_duration("PT") is None
    assert parse_duration({"value": "PT5M"}) is None
    assert parse_duration(True) is None


def test_parse_servings():
    assert parse_servings(4) == 4
    assert parse_servings("6 servings") == 6
    assert parse_servings("Serves 2-4") == 2
    assert parse_servings(["8", "8 pieces"]) == 8
    assert parse_servings("a few") is None
    assert parse_servings([]) is None
    assert parse_servings(None) is None


def test_parse_image_shapes():
    assert parse_image("https://example.com/a.jpg") == "https://example.com/a.jpg"
    assert parse_image(["https://example.com/b.jpg", "https://example.com/c.jpg"]) == "https://example.com/b.jpg"
    assert parse_image({"@type": "ImageObject", "url": "https://example.com/d.jpg"}) == "https://example.com/d.jpg"
    assert parse_image({"@id": "https://example.com/#image"}) == "https://example.com/#image"
    assert parse_image([{"url": "https://example.com/e.jpg"}]) == "https://example.com/e.jpg"
    assert parse_image({"height": 100}) == ""
    assert parse_image(None) == ""
    assert parse_image(42) == ""


def test_parse_calories():
    assert parse_calories({"@type": "NutritionInformation", "calories": "320 kcal"}) == 320
    assert parse_calories({"Calories": "210 calories"}) == 210
    assert parse_calories({"calories": 150}) == 150
    assert parse_calories({"fatContent": "10 g"}) is None
    assert parse_calories({"calories": "unknown"}) is None
    assert parse_calories("320 kcal") is None
    assert parse_calories(None) is None


def test_clean_text():
    assert clean_text("  Lemon \n\t Cod  ") == "Lemon Cod"
    assert clean_text("<p>Mix the <b>flour</b></p>") == "Mix the flour"
    assert clean_text("Mac &amp; Cheese") == "Mac & Cheese"
    assert clean_text(None) == ""
    assert clean_text("") == ""
    assert clean_text(3) == "3"


def test_looks_like_ingredient():
    assert looks_like_ingredient("2 cups flour") is True
    assert looks_like_ingredient("Salt to taste") is True
    assert looks_like_ingredient("1 TBSP olive oil") is True
    assert looks_like_ingredient("Preheat oven to 350 degrees") is False
    assert looks_like_ingredient("Subscribe to our newsletter") is False
    # word boundaries: "scant" must not match "can"
    assert looks_like_ingredient("scant") is False


def test_extract_instruction_text_mixed_entries():
    instructions = [
        "Heat the pan.",
        {"@type": "HowToStep", "text": "Add <b>oil</b>."},
        {"@type": "HowToStep", "name": "Sear the fish."},
        {
            "@type": "HowToSection",
            "name": "Sauce",
            "itemListElement": [
                {"@type": "HowToStep", "text": "Melt butter."},
                {"@type": "HowToStep", "text": "Whisk in lemon."},
            ],
        },
        {"@type": "HowToStep", "text": "   "},
    ]
    assert extract_instruction_text(instructions) == [
        "Heat the pan.",
        "Add oil.",
        "Sear the fish.",
        "Melt butter. Whisk in lemon.",
    ]


def test_extract_instruction_text_block_of_text():
    text = "Boil water.\n\nAdd pasta.\nDrain."
    assert extract_instruction_text(text) == ["Boil water.", "Add pasta.", "Drain."]
    assert extract_instruction_text("<p>One</p><p>Two</p>") == ["One", "Two"]
    assert extract_instruction_text(None) == []


def test_coerce_text_list():
    assert coerce_text_list(["1 egg", "", {"text": "2 cups milk"}, None]) == ["1 egg", "2 cups milk"]
    assert coerce_text_list("1 lemon") == ["1 lemon"]
    assert coerce_text_list(None) == []


def test_non_finite_numbers_are_discarded():
    for value in (float("nan"), float("inf"), float("-inf")):
        assert parse_duration(value) is None
        assert parse_servings(value) is None
    assert parse_servings([float("inf")]) is None
    assert parse_duration("PT" + "9" * 400 + "S") is None


def test_clean_text_keeps_escaped_comparisons():
    assert clean_text("Cook until 5 &lt; temp and temp &gt; 3 degrees") == "Cook until 5 < temp and temp > 3 degrees"
    assert clean_text("&lt;b&gt;Bold&lt;/b&gt; sauce <!-- note -->") == "Bold sauce"
    once = clean_text("Bake at 350 &lt; 400 &amp; rest")
    assert clean_text(once) == once
