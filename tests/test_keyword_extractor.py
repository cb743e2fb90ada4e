from keyword_extractor import first_sinhala_keyword, has_sinhala, sinhala_runs


def test_short_first_run_is_joined_with_second():
    assert first_sinhala_keyword("මම හෙට එනවා") == "මම හෙට"


def test_long_first_run_stands_alone():
    assert first_sinhala_keyword("අම්ම ගෙදර ආවාම") == "අම්ම"
    assert first_sinhala_keyword("මචන් zoom meeting එක") == "මචන්"


def test_short_single_run_is_returned_as_is():
    assert first_sinhala_keyword("වහා") == "වහා"


def test_latin_text_between_runs_is_skipped():
    assert first_sinhala_keyword("Risk එකක් ගන්නෙ") == "එකක්"
    assert first_sinhala_keyword("USD 1500 වලට ml 500ක් ගන්න") == "වලට ක්"


def test_no_sinhala_yields_empty_string():
    assert first_sinhala_keyword("mama heta enavaa") == ""
    assert first_sinhala_keyword("") == ""
    assert first_sinhala_keyword(None) == ""


def test_prefixed_expectation_text():
    text = "Sinhala output should update automatically while typing and display: මම පන්සල් යනවා"
    assert first_sinhala_keyword(text) == "මම පන්සල්"


def test_is_deterministic():
    text = "අපි හෙට මාමලාගේ ගෙදර යනවා"
    assert {first_sinhala_keyword(text) for _ in range(5)} == {"අපි හෙට"}


def test_runs_and_detection():
    assert sinhala_runs("ඔයාට කොහොමද?") == ["ඔයාට", "කොහොමද"]
    assert has_sinhala("abc ම")
    assert not has_sinhala("abc")
