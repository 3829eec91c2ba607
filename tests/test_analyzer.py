import asyncio

import pytest
from conftest import FakeSimilarityService, match

from intent_analyzer.core.exceptions import InputValidationError
from intent_analyzer.modules.analysis import AnalysisBuilder, validate_sentence
from intent_analyzer.modules.lexicon import SlotStatus


def analyze(analyzer, sentence):
    return asyncio.run(analyzer.analyze(sentence))


def test_clear_create_command(make_analyzer, fake_service):
    result = analyze(make_analyzer(fake_service), "I want to create an objective")

    assert result.intent.status == SlotStatus.CLEAR
    assert result.intent.value == "menu"
    assert result.process.value == "objective"
    assert result.action.value == "create"
    assert result.filters_outcome.status == SlotStatus.NOT_APPLICABLE
    assert result.final_text == "Your intent is clear to create on objective."
    assert result.proceed
    assert not result.redirect
    assert fake_service.search_calls == []


def test_dictionary_hits_do_not_need_the_validator(make_analyzer):
    healthy = analyze(make_analyzer(FakeSimilarityService()), "I want to create an objective")
    broken = analyze(make_analyzer(FakeSimilarityService(fail=True)), "I want to create an objective")
    assert broken.to_dict() == healthy.to_dict()


def test_help_request_redirects(make_analyzer, fake_service, monkeypatch):
    skipped_calls = []

    def record_action_text(*args, **kwargs):
        skipped_calls.append("action")
        return ""

    async def record_filters(*args, **kwargs):
        skipped_calls.append("filters")
        return []

    monkeypatch.setattr("intent_analyzer.modules.analysis.analyzer.extract_action_text", record_action_text)
    analyzer = make_analyzer(fake_service)
    monkeypatch.setattr(analyzer.filter_extractor, "extract", record_filters)

    result = analyze(analyzer, "How do I create an objective?")

    assert result.intent.value == "help"
    assert result.redirect
    assert result.redirect_target == "/docs/objective-help.html"
    assert not result.proceed
    assert result.action.status == SlotStatus.NOT_APPLICABLE
    assert result.filters_outcome.status == SlotStatus.NOT_APPLICABLE
    assert result.final_text == "Redirecting you to the objective help documentation."
    assert skipped_calls == []
    assert "action" not in fake_service.searched_categories()

    data = result.to_dict()
    assert data["redirect_flag"] is True
    assert data["redirect_url"] == "/docs/objective-help.html"


def test_filter_scenario(make_analyzer, menu_intent_service):
    result = analyze(make_analyzer(menu_intent_service), "search objectives where priority = high")

    assert result.intent.status == SlotStatus.ADEQUATE
    assert result.intent.value == "menu"
    assert result.action.value == "search"
    assert len(result.filters) == 1
    assert result.filters[0].to_dict() == {
        "name": "priority",
        "operator": "equal to",
        "value": "high",
        "name_status": "Clear",
        "operator_status": "Clear",
        "value_status": "Clear",
    }
    assert result.filters_outcome.status == SlotStatus.CLEAR
    assert result.proceed
    assert result.final_text == "Your intent is clear to search on objective with priority equal to high."

    trace = result.to_dict()["validation_logs"]
    assert len(trace) == 1
    assert trace[0]["component_type"] == "intent"
    assert trace[0]["validation_path"] == "GOLD"


def test_filterable_action_without_filters(make_analyzer, fake_service):
    result = analyze(make_analyzer(fake_service), "I want to search objectives")
    assert result.filters_outcome.status == SlotStatus.NOT_FOUND
    assert result.filters == ()
    assert result.proceed
    assert result.final_text == "Your intent is clear to search on objective."


def test_unclear_filter_blocks_proceed(make_analyzer, fake_service):
    result = analyze(make_analyzer(fake_service), "I want to search objectives where colour = purple")
    assert result.filters_outcome.status == SlotStatus.NOT_CLEAR
    assert not result.proceed
    assert result.final_text == "Unable to determine: filters."


def test_unknown_filter_name_is_not_read_as_a_quarter(make_analyzer, fake_service):
    result = analyze(make_analyzer(fake_service), "i want to search objectives where quality = high")
    assert result.filters[0].raw == ("quality", "=", "high")
    assert result.filters[0].name.status == SlotStatus.NOT_CLEAR
    assert result.filters_outcome.status == SlotStatus.NOT_CLEAR
    assert not result.proceed


def test_date_value_is_not_read_as_a_quarter(make_analyzer, fake_service):
    result = analyze(make_analyzer(fake_service), "i want to search objectives where due < 2024-12-31")
    assert result.filters[0].raw == ("due", "<", "2024-12-31")
    assert result.filters[0].value.status == SlotStatus.NOT_CLEAR
    assert result.filters[0].value.value != "q2"
    assert not result.proceed


def test_multi_word_filter_name_proceeds(make_analyzer, fake_service):
    result = analyze(make_analyzer(fake_service), "i want to search objectives where due date = today")
    assert result.filters[0].to_dict()["name"] == "due"
    assert result.filters_outcome.status == SlotStatus.CLEAR
    assert result.proceed


@pytest.mark.parametrize("sentence, final_text", [
    ("i want to update the priority of an objective", "Your intent is clear to modify on objective."),
    ("i want to search objectives under review", "Your intent is clear to search on objective."),
])
def test_no_filters_without_a_where_clause(make_analyzer, fake_service, sentence, final_text):
    result = analyze(make_analyzer(fake_service), sentence)
    assert result.filters == ()
    assert result.filters_outcome.status == SlotStatus.NOT_FOUND
    assert result.proceed
    assert result.final_text == final_text


def test_gibberish_is_rejected(make_analyzer, fake_service):
    result = analyze(make_analyzer(fake_service), "asdf qwer")

    for outcome in (result.intent, result.process, result.action):
        assert outcome.status in (SlotStatus.NOT_FOUND, SlotStatus.NOT_CLEAR)
    assert not result.proceed
    assert result.final_text == "Unable to determine: intent, process, action."
    assert result.suggested_action
    assert result.example_query


def test_keyword_present_but_unresolved_is_not_clear(make_analyzer, fake_service):
    result = analyze(make_analyzer(fake_service), "I want to juggle")
    assert result.intent.status == SlotStatus.CLEAR
    assert result.process.status == SlotStatus.NOT_CLEAR
    assert result.action.status == SlotStatus.NOT_CLEAR
    assert not result.proceed
    assert "create, modify, search or delete" in result.suggested_action


def test_semantic_action_match(make_analyzer):
    service = FakeSimilarityService(matches={("action", "juggle"): [match("create", 0.9)]})
    result = analyze(make_analyzer(service), "I want to juggle")
    assert result.action.status == SlotStatus.ADEQUATE
    assert result.action.value == "create"
    # process text is empty, so only the action reaches the similarity service
    assert service.search_calls == [("action", "juggle")]


def test_analysis_is_idempotent(make_analyzer, menu_intent_service):
    analyzer = make_analyzer(menu_intent_service)
    first = analyze(analyzer, "search objectives where priority = high")
    second = analyze(analyzer, "search objectives where priority = high")
    assert first.to_dict() == second.to_dict()


@pytest.mark.parametrize("sentence", ["", "   ", None])
def test_empty_sentence_rejected(sentence):
    with pytest.raises(InputValidationError):
        validate_sentence(sentence)


def test_oversized_sentence_rejected():
    with pytest.raises(InputValidationError) as exc_info:
        validate_sentence("a" * 20, max_length=10)
    assert exc_info.value.details["max_length"] == 10


def test_slot_cannot_be_set_twice():
    builder = AnalysisBuilder("text")
    outcome = type("Outcome", (), {})()
    builder.set_slot("intent", outcome)
    with pytest.raises(RuntimeError):
        builder.set_slot("intent", outcome)
