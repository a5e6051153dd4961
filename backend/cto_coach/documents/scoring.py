"""Keyword relevance scoring and snippet extraction."""

from collections.abc import Iterable
from dataclasses import dataclass

from cto_coach.core.config import SearchConfig
from cto_coach.documents.classifier import join_sentences, split_sentences
from cto_coach.documents.models import Document, ScoredDocument

MIN_QUERY_WORD_LENGTH = 3
SNIPPET_SENTENCES = 3
FALLBACK_SENTENCES = 2


@dataclass(frozen=True)
class ScoringWeights:
    """Additive weights for each matching field.

    These are heuristic constants, not calibrated values.
    """

    title: float = 10.0
    summary: float = 8.0
    content: float = 2.0
    tag: float = 5.0
    category: float = 3.0

    @classmethod
    def from_config(cls, config: SearchConfig) -> "ScoringWeights":
        return cls(
            title=config.title_weight,
            summary=config.summary_weight,
            content=config.content_weight,
            tag=config.tag_weight,
            category=config.category_weight,
        )


DEFAULT_WEIGHTS = ScoringWeights()


def score_document(query: str, document: Document, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Score one document against a query.

    All matches are case-insensitive substring matches on the whole query:

    - title contains the query: ``weights.title``
    - summary contains the query: ``weights.summary``
    - each non-overlapping occurrence in the content: ``weights.content``
    - each tag containing the query: ``weights.tag``
    - category contains the query: ``weights.category``

    A blank query scores 0. The score never excludes a document by itself.
    """
    if not query.strip():
        return 0.0

    needle = query.lower()

    score = 0.0
    if needle in document.title.lower():
        score += weights.title
    if needle in (document.summary or "").lower():
        score += weights.summary
    score += weights.content * document.content.lower().count(needle)
    score += weights.tag * sum(1 for tag in document.tags or [] if needle in tag.lower())
    if needle in (document.category or "").lower():
        score += weights.category
    return score


def rank_documents(
    query: str,
    documents: Iterable[Document],
    limit: int | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[ScoredDocument]:
    """Score every candidate and sort by score descending.

    Ties keep the order in which candidates were supplied. ``limit`` truncates
    after sorting.
    """
    scored = [ScoredDocument(document=doc, score=score_document(query, doc, weights)) for doc in documents]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored if limit is None else scored[:limit]


def extract_relevant_content(content: str, query: str) -> str:
    """Pick up to three body sentences mentioning a query word.

    Only query words of three or more characters count. Falls back to the
    first two sentences when nothing matches.
    """
    words = [word for word in query.lower().split() if len(word) >= MIN_QUERY_WORD_LENGTH]
    sentences = split_sentences(content)

    matching = [s for s in sentences if any(word in s.lower() for word in words)]
    if matching:
        return join_sentences(matching[:SNIPPET_SENTENCES])
    return join_sentences(sentences[:FALLBACK_SENTENCES])
