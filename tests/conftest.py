import pytest

from intent_analyzer.core.exceptions import SimilarityServiceError
from intent_analyzer.modules.analysis import CircleValidator, IntentAnalyzer, ValidationThresholds
from intent_analyzer.modules.lexicon import Category, get_default_lexicon
from intent_analyzer.modules.similarity.models import SimilarityMatch


class FakeSimilarityService:
    """
    In-memory stand-in for SimilarityService.

    search() answers from `matches`, keyed by (category value, text);
    similarity() answers from `similarities`, keyed by (text, phrase) and
    defaulting to 0.0. Every call is recorded.
    """

    def __init__(self, matches=None, similarities=None, fail=False):
        self.matches = matches or {}
        self.similarities = similarities or {}
        self.fail = fail
        self.search_calls = []
        self.similarity_calls = []
        self.upserts = []
        self.point_count = 0

    def _check(self):
        if self.fail:
            raise SimilarityServiceError("similarity service down")

    async def search(self, text, category, limit=10, threshold=0.0):
        self.search_calls.append((category.value, text))
        self._check()
        hits = self.matches.get((category.value, text), [])
        return [hit for hit in hits if hit.score >= threshold][:limit]

    async def similarity(self, text, phrase):
        self.similarity_calls.append((text, phrase))
        self._check()
        return self.similarities.get((text, phrase), 0.0)

    async def upsert(self, category, text, value):
        self._check()
        self.upserts.append((category.value, text.strip().lower(), value))
        return 1_000_000 + len(self.upserts) - 1

    async def collection_info(self):
        self._check()
        return {"collection": "test", "point_count": self.point_count, "embedding_model": "fake"}

    def searched_categories(self):
        return [category for category, _ in self.search_calls]


def match(value, score, text=None):
    return SimilarityMatch(value=value, score=score, text=text or value)


@pytest.fixture
def lexicon():
    return get_default_lexicon()


@pytest.fixture
def fake_service():
    return FakeSimilarityService()


@pytest.fixture
def make_analyzer(lexicon):
    def _make(service, thresholds=None):
        validator = CircleValidator(service, lexicon, thresholds=thresholds or ValidationThresholds())
        return IntentAnalyzer(lexicon, validator)
    return _make


@pytest.fixture
def menu_intent_service():
    """Resolves the intent of 'search objectives where priority = high' semantically."""
    return FakeSimilarityService(
        matches={
            (Category.INTENT.value, "search objectives where priority"): [match("menu", 0.82, "i want to")],
        }
    )
