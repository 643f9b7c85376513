"""Tests for the generated-text parser."""

from packpal.engine.llm.parser import parse_generated_text


def names(categories) -> list[tuple[str, list[str]]]:
    return [(c.name, [i.name for i in c.items]) for c in categories]


def test_two_categories_in_order() -> None:
    text = "Essentials:\n- passport\n- wallet\nClothing:\n- shirt\n"
    assert names(parse_generated_text(text)) == [
        ("Essentials", ["passport", "wallet"]),
        ("Clothing", ["shirt"]),
    ]


def test_headers_without_items_yield_nothing() -> None:
    assert parse_generated_text("Essentials:\nClothing:\nToiletries:\n") == []


def test_empty_category_is_dropped_between_filled_ones() -> None:
    text = "Essentials:\n- passport\nElectronics:\n\nClothing:\n- socks\n"
    assert names(parse_generated_text(text)) == [
        ("Essentials", ["passport"]),
        ("Clothing", ["socks"]),
    ]


def test_all_bullet_markers_and_whitespace() -> None:
    text = "  TOILETRIES:  \n  - toothbrush\n• floss\n*   razor \n-\n"
    assert names(parse_generated_text(text)) == [("TOILETRIES", ["toothbrush", "floss", "razor"])]


def test_items_before_any_header_are_ignored() -> None:
    text = "Here is your list\n- stray item\nEssentials:\n- passport\n"
    assert names(parse_generated_text(text)) == [("Essentials", ["passport"])]


def test_continuation_lines_become_items() -> None:
    text = "Electronics:\nPhone charger\nTravel adapter\nNote: bring spares\n"
    assert names(parse_generated_text(text)) == [
        ("Electronics", ["Phone charger", "Travel adapter"])
    ]


def test_repeated_category_names_are_merged() -> None:
    text = "Clothing:\n- shirt\nEssentials:\n- passport\nClothing:\n- hat\n"
    assert names(parse_generated_text(text)) == [
        ("Clothing", ["shirt", "hat"]),
        ("Essentials", ["passport"]),
    ]


def test_numbered_header_keeps_text() -> None:
    text = "1. Essentials (documents):\n- passport\n"
    assert names(parse_generated_text(text)) == [("1. Essentials (documents)", ["passport"])]


def test_empty_and_blank_input() -> None:
    assert parse_generated_text("") == []
    assert parse_generated_text("\n\n   \n") == []


def test_colon_only_header_closes_category() -> None:
    text = "Essentials:\n- passport\n:\n- orphan\n"
    assert names(parse_generated_text(text)) == [("Essentials", ["passport"])]
