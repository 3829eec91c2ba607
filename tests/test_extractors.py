from intent_analyzer.modules.analysis.extractors import (
    extract_action_text,
    extract_intent_text,
    extract_process_text,
    find_earliest,
    normalize_utterance,
)


def test_normalize_utterance():
    assert normalize_utterance("  I Want   to\tCreate ") == "i want to create"
    assert normalize_utterance("") == ""


def test_find_earliest_prefers_longest_at_same_position():
    assert find_earliest("search for objectives", ["search", "search for"]) == (0, "search for")


def test_find_earliest_whole_words_only():
    assert find_earliest("research objectives", ["search"]) is None
    assert find_earliest("please find it", ["find", "it"]) == (7, "find")


def test_intent_text_before_verb(lexicon):
    assert extract_intent_text("i want to create an objective", lexicon) == "i want to"


def test_intent_text_falls_back_to_first_tokens(lexicon):
    assert extract_intent_text("search objectives where priority = high", lexicon) == "search objectives where priority"
    assert extract_intent_text("asdf qwer", lexicon) == "asdf qwer"


def test_process_text_drops_articles(lexicon):
    assert extract_process_text("i want to create an objective", lexicon) == "objective"
    assert extract_process_text("i want to add a new initiative", lexicon) == "initiative"


def test_process_text_keeps_multiword_process(lexicon):
    assert extract_process_text("i need to update the key result checkin for q1", lexicon) == "key result checkin"
    assert extract_process_text("i need to find key results", lexicon) == "key results"


def test_process_text_stops_at_filter_keyword(lexicon):
    assert extract_process_text("search objectives where priority = high", lexicon) == "objectives"


def test_process_text_without_verb(lexicon):
    assert extract_process_text("asdf qwer", lexicon) == ""


def test_action_text(lexicon):
    assert extract_action_text("i want to search for goals", lexicon) == "search for"
    assert extract_action_text("i want to browse objectives", lexicon) == "browse"
    assert extract_action_text("asdf qwer", lexicon) == ""
