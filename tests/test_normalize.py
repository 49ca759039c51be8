from addrverify.domain.address import STREET_ABBREVIATIONS, is_blank, normalize_address


def test_empty_and_missing_input():
    assert normalize_address("") == ""
    assert normalize_address(None) == ""


def test_lowercases_strips_punctuation_and_expands():
    assert normalize_address("456 Oak Ave.") == "456 oak avenue"


def test_multiple_abbreviations_expand_independently():
    assert normalize_address("St. James Ct") == "street james court"


def test_word_boundary_keeps_longer_words_intact():
    assert normalize_address("Stan St") == "stan street"
    assert normalize_address("Drake Dr") == "drake drive"
    assert normalize_address("Placid Pl") == "placid place"


def test_every_table_entry_expands():
    for abbr, full in STREET_ABBREVIATIONS.items():
        assert normalize_address(f"1 Main {abbr.upper()}.") == f"1 main {full}"


def test_expansions_are_not_reexpanded():
    # no expansion contains another key as a whole word
    assert normalize_address("12 Blvd") == "12 boulevard"
    assert normalize_address("12 Street") == "12 street"


def test_collapses_whitespace():
    assert normalize_address("  10   Downing\t St ,\n London ") == "10 downing street london"


def test_other_punctuation_is_kept():
    assert normalize_address("Apt #4-B, 9 Elm Rd") == "apt #4-b 9 elm road"


def test_full_example_addresses():
    assert normalize_address("456 Oak Avenue, Springfield, IL 62704") == "456 oak avenue springfield il 62704"
    assert normalize_address("456 Oak Ave, Springfield, Illinois 62704") == "456 oak avenue springfield illinois 62704"


def test_is_blank():
    assert is_blank(None) is True
    assert is_blank("   ") is True
    assert is_blank(" x ") is False
