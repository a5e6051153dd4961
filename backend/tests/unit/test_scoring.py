"""Tests for relevance scoring, ranking and snippets."""

from cto_coach.core.config import SearchConfig
from cto_coach.documents.scoring import (
    ScoringWeights,
    extract_relevant_content,
    rank_documents,
    score_document,
)


class TestScoreDocument:
    """Additive keyword score."""

    def test_title_match_scores_at_least_ten(self, document_factory):
        """A title equal to the query earns the title weight."""
        doc = document_factory(title="Microservices", content="")
        assert score_document("microservices", doc) >= 10

    def test_each_component(self, document_factory):
        """Title, summary, content, tag and category weights add up."""
        doc = document_factory(
            title="API design",
            summary="How to design an api",
            content="api api and another API",
            tags=["api", "rest-api", "graphql"],
            category="Architecture",
        )
        # title 10 + summary 8 + content 3*2 + tags 2*5, category does not match
        assert score_document("API", doc) == 10 + 8 + 6 + 10

    def test_category_match(self, document_factory):
        """Category containing the query adds the category weight."""
        doc = document_factory(title="Notes", category="DevOps")
        assert score_document("devops", doc) == 3

    def test_no_match_is_zero(self, document_factory):
        """Nothing detectable scores zero."""
        doc = document_factory(title="Hiring", content="interview loops", category="Leadership")
        assert score_document("kubernetes", doc) == 0

    def test_blank_query_is_zero(self, document_factory):
        """Empty or whitespace queries never match."""
        doc = document_factory(title="Anything", content="anything at all")
        assert score_document("", doc) == 0
        assert score_document("   ", doc) == 0

    def test_monotonic_in_content_occurrences(self, document_factory):
        """More occurrences in content never lower the score."""
        scores = [
            score_document("scale", document_factory(title="T", content="scale " * n))
            for n in range(6)
        ]
        assert scores == sorted(scores)
        assert scores[5] - scores[0] == 10

    def test_non_overlapping_occurrences(self, document_factory):
        """Overlapping matches count once."""
        doc = document_factory(title="T", content="aaaa")
        assert score_document("aa", doc) == 2 * 2

    def test_query_is_literal(self, document_factory):
        """Regex metacharacters in the query are matched literally."""
        doc = document_factory(title="C++ (advanced)", content="c++ tips")
        assert score_document("c++", doc) == 10 + 2

    def test_custom_weights(self, document_factory):
        """Weights come from configuration."""
        weights = ScoringWeights.from_config(SearchConfig(title_weight=1.0, content_weight=0.5))
        doc = document_factory(title="Scale", content="scale scale")
        assert score_document("scale", doc, weights) == 1.0 + 2 * 0.5


class TestRankDocuments:
    """Stable descending ranking."""

    def test_sorted_descending(self, document_factory):
        """Higher scores come first."""
        low = document_factory(id=1, title="Other", content="testing")
        high = document_factory(id=2, title="Testing", content="testing testing")
        ranked = rank_documents("testing", [low, high])
        assert [item.document.id for item in ranked] == [2, 1]
        assert ranked[0].score > ranked[1].score

    def test_ties_keep_input_order(self, document_factory):
        """Equal scores keep the order they were supplied in."""
        docs = [document_factory(id=i, title=f"Doc {i}") for i in (3, 1, 2)]
        ranked = rank_documents("nothing matches", docs)
        assert [item.document.id for item in ranked] == [3, 1, 2]

    def test_zero_scores_are_kept(self, document_factory):
        """The scorer never filters."""
        docs = [document_factory(id=1, title="A"), document_factory(id=2, title="B")]
        assert len(rank_documents("zzz", docs)) == 2

    def test_truncate_equals_sort_then_slice(self, document_factory):
        """Limiting is the same as sorting everything and slicing."""
        docs = [
            document_factory(id=i, title="team" if i % 3 == 0 else "x", content="team " * (i % 4))
            for i in range(1, 11)
        ]
        full = rank_documents("team", docs)
        for k in range(len(docs) + 1):
            limited = rank_documents("team", docs, limit=k)
            assert [item.document.id for item in limited] == [item.document.id for item in full[:k]]


class TestExtractRelevantContent:
    """Snippets shown to the user."""

    CONTENT = (
        "Teams should own their services. Hiring takes a long time. "
        "Service ownership reduces handoffs. Budgets are set yearly. "
        "Every service needs an owner on call. Services without owners decay."
    )

    def test_matching_sentences(self):
        """Sentences containing a query word are returned, at most three."""
        snippet = extract_relevant_content(self.CONTENT, "service ownership")
        assert snippet == (
            "Teams should own their services. Service ownership reduces handoffs. "
            "Every service needs an owner on call."
        )

    def test_short_query_words_ignored(self):
        """Query words of two characters or less do not match."""
        snippet = extract_relevant_content(self.CONTENT, "on of")
        assert snippet == "Teams should own their services. Hiring takes a long time."

    def test_fallback_first_two_sentences(self):
        """Without matches the first two sentences are used."""
        snippet = extract_relevant_content(self.CONTENT, "kubernetes")
        assert snippet == "Teams should own their services. Hiring takes a long time."

    def test_empty_content(self):
        """Empty content gives a lone period."""
        assert extract_relevant_content("", "anything") == "."
