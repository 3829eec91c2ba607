import asyncio

from conftest import FakeSimilarityService

from intent_analyzer.modules.analysis import CircleValidator
from intent_analyzer.modules.analysis.filters import FilterExtractor, filter_scope
from intent_analyzer.modules.analysis.resolvers import (
    CircleResolver,
    DictionaryResolver,
    PhraseResolver,
    ResolverCascade,
)
from intent_analyzer.modules.lexicon import SlotStatus


def cascade_for(lexicon, service=None):
    service = service or FakeSimilarityService()
    return ResolverCascade([
        DictionaryResolver(lexicon),
        PhraseResolver(lexicon),
        CircleResolver(CircleValidator(service, lexicon), []),
    ])


def test_filter_scope():
    assert filter_scope("search objectives where priority = high") == ("priority = high", True)
    assert filter_scope("search objectives due today") == ("search objectives due today", False)


def test_single_equality_clause(lexicon):
    assert FilterExtractor(lexicon).find_clauses("search objectives where priority = high") == [
        ("priority", "=", "high"),
    ]


def test_comparison_wins_over_equality(lexicon):
    clauses = FilterExtractor(lexicon).find_clauses("find key results where priority is greater than low")
    assert clauses == [("priority", "greater than", "low")]


def test_multiple_clauses_in_order(lexicon):
    clauses = FilterExtractor(lexicon).find_clauses(
        "search initiatives where status = pending and priority = high"
    )
    assert clauses == [("status", "=", "pending"), ("priority", "=", "high")]


def test_duplicate_clauses_kept_once(lexicon):
    clauses = FilterExtractor(lexicon).find_clauses("search goals where status = done and status = done")
    assert clauses == [("status", "=", "done")]


def test_quarter_clause(lexicon):
    assert FilterExtractor(lexicon).find_clauses("search objectives for quarter 2") == [("quarter", "=", "2")]
    assert FilterExtractor(lexicon).find_clauses("search objectives where quarter = q3") == [("quarter", "=", "q3")]


def test_juxtaposition_implies_equality(lexicon):
    assert FilterExtractor(lexicon).find_clauses("update initiatives where priority high") == [
        ("priority", "=", "high"),
    ]


def test_extract_resolves_components(lexicon):
    filters = asyncio.run(
        FilterExtractor(lexicon).extract("search objectives where priority = high", cascade_for(lexicon))
    )
    assert len(filters) == 1
    item = filters[0]
    assert (item.name.value, item.operator.value, item.value.value) == ("priority", "equal to", "high")
    assert item.status == SlotStatus.CLEAR
    assert item.to_dict() == {
        "name": "priority",
        "operator": "equal to",
        "value": "high",
        "name_status": "Clear",
        "operator_status": "Clear",
        "value_status": "Clear",
    }


def test_phrase_value_is_adequate(lexicon):
    filters = asyncio.run(
        FilterExtractor(lexicon).extract("search objectives where priority = urgent", cascade_for(lexicon))
    )
    assert filters[0].value.value == "high"
    assert filters[0].status == SlotStatus.ADEQUATE


def test_unknown_component_is_not_clear(lexicon):
    filters = asyncio.run(
        FilterExtractor(lexicon).extract("search objectives where colour = purple", cascade_for(lexicon))
    )
    assert len(filters) == 1
    assert filters[0].name.status == SlotStatus.NOT_CLEAR
    assert filters[0].status == SlotStatus.NOT_CLEAR
    assert filters[0].describe() == "colour equal to purple"


def test_multi_word_filter_names(lexicon):
    extractor = FilterExtractor(lexicon)
    assert extractor.find_clauses("search objectives where due date = today") == [("due date", "=", "today")]
    assert extractor.find_clauses("search tasks where assigned to = john") == [("assigned to", "=", "john")]


def test_multi_word_name_resolves_to_standard_value(lexicon):
    filters = asyncio.run(
        FilterExtractor(lexicon).extract("search objectives where due date = today", cascade_for(lexicon))
    )
    assert (filters[0].name.value, filters[0].value.value) == ("due", "today")
    assert filters[0].status == SlotStatus.CLEAR


def test_trailing_punctuation_is_not_part_of_the_value(lexicon):
    assert FilterExtractor(lexicon).find_clauses("search objectives where priority = high.") == [
        ("priority", "=", "high"),
    ]


def test_no_clauses_without_where_or_known_name(lexicon):
    extractor = FilterExtractor(lexicon)
    assert extractor.find_clauses("i want to update the priority of an objective") == []
    assert extractor.find_clauses("i want to search objectives under review") == []


def test_filter_components_must_match_whole_terms(lexicon):
    filters = asyncio.run(
        FilterExtractor(lexicon).extract(
            "search objectives where quality = high and due < 2024-12-31", cascade_for(lexicon)
        )
    )
    assert [item.raw for item in filters] == [("quality", "=", "high"), ("due", "<", "2024-12-31")]
    # neither 'quality' nor the date may be read as a quarter
    assert filters[0].name.status == SlotStatus.NOT_CLEAR
    assert filters[1].name.value == "due"
    assert filters[1].value.status == SlotStatus.NOT_CLEAR
