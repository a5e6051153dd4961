"""Keyword-based document classification.

Assigns a category, tags, an extractive summary, a word count and a display
title to uploaded documents. Everything here is a pure function over strings.
"""

import re
from pathlib import PurePath

from cto_coach.documents.models import DocumentProfile

# =============================================================================
# Tables
# =============================================================================

DEFAULT_CATEGORY = "General"

# Declaration order is the tie-break order.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Architecture",
        ("architecture", "design pattern", "system design", "microservices", "monolith", "scalability"),
    ),
    ("Leadership", ("leadership", "management", "team", "mentoring", "culture", "strategy")),
    ("Engineering", ("engineering", "development", "coding", "programming", "software", "technical")),
    (
        "Process",
        ("process", "workflow", "agile", "scrum", "kanban", "methodology", "best practice"),
    ),
    (
        "Security",
        ("security", "vulnerability", "authentication", "authorization", "encryption", "privacy"),
    ),
    ("DevOps", ("devops", "deployment", "ci/cd", "infrastructure", "monitoring", "automation")),
    ("Quality", ("quality", "testing", "code review", "qa", "bug", "defect", "reliability")),
)

CATEGORIES: tuple[str, ...] = tuple(name for name, _ in CATEGORY_KEYWORDS)

TAG_VOCABULARY: tuple[str, ...] = (
    "react", "nodejs", "typescript", "javascript", "python", "java",
    "aws", "azure", "gcp", "docker", "kubernetes",
    "api", "rest", "graphql", "database", "sql", "nosql",
    "frontend", "backend", "fullstack", "mobile",
    "performance", "optimization", "scalability", "reliability",
    "testing", "tdd", "bdd", "unit test", "integration test",
    "agile", "scrum", "kanban", "ci/cd", "git",
)  # fmt: skip

# (trigger pattern, derived tag)
DERIVED_TAGS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"microservice"), "microservices"),
    (re.compile(r"monolith"), "monolith"),
    (re.compile(r"cloud"), "cloud"),
    (re.compile(r"ai|machine learning"), "ai-ml"),
)

SENTENCE_SPLIT = re.compile(r"[.!?]+")
MIN_SENTENCE_LENGTH = 10
SUMMARY_SENTENCES = 3


# =============================================================================
# Classification
# =============================================================================


def _combined_text(title: str, content: str) -> str:
    return f"{title} {content}".lower()


def category_scores(title: str, content: str) -> list[tuple[str, int]]:
    """Keyword hit count per category, in declaration order."""
    text = _combined_text(title, content)
    return [
        (name, sum(text.count(keyword) for keyword in keywords))
        for name, keywords in CATEGORY_KEYWORDS
    ]


def categorize(title: str, content: str) -> str:
    """Pick the category with the most keyword hits.

    Ties go to the category declared first; no hits at all gives ``"General"``.

    Examples:
        >>> categorize("Notes", "Our deployment automation and monitoring")
        'DevOps'
    """
    best_name, best_score = DEFAULT_CATEGORY, 0
    for name, score in category_scores(title, content):
        if score > best_score:
            best_name, best_score = name, score
    return best_name


def extract_tags(title: str, content: str) -> list[str]:
    """Collect vocabulary tags and derived tags found in title and body.

    The result is deduplicated; vocabulary tags come first in vocabulary order.
    """
    text = _combined_text(title, content)
    tags = [tag for tag in TAG_VOCABULARY if tag in text]
    tags.extend(tag for pattern, tag in DERIVED_TAGS if pattern.search(text))
    return list(dict.fromkeys(tags))


def split_sentences(text: str) -> list[str]:
    """Split on runs of ``.``, ``!`` and ``?`` and drop short fragments.

    Fragments are trimmed; anything under 10 characters after trimming is
    discarded.
    """
    sentences = (fragment.strip() for fragment in SENTENCE_SPLIT.split(text))
    return [sentence for sentence in sentences if len(sentence) >= MIN_SENTENCE_LENGTH]


def join_sentences(sentences: list[str]) -> str:
    """Join with ``". "`` and close with exactly one period."""
    return ". ".join(sentences).strip() + "."


def summarize(content: str) -> str:
    """First three sentences of the body."""
    return join_sentences(split_sentences(content)[:SUMMARY_SENTENCES])


def count_words(content: str) -> int:
    return len(content.split())


def generate_title(filename: str) -> str:
    """Display title from an upload filename.

    Examples:
        >>> generate_title("scaling-engineering_teams.md")
        'Scaling Engineering Teams'
    """
    stem = PurePath(filename).stem
    spaced = re.sub(r"[-_]", " ", stem)
    return re.sub(r"\b\w", lambda m: m.group().upper(), spaced).strip()


def classify(filename: str, content: str) -> DocumentProfile:
    """Build the full profile for an uploaded file."""
    title = generate_title(filename)
    return DocumentProfile(
        title=title,
        category=categorize(title, content),
        tags=extract_tags(title, content),
        summary=summarize(content),
        word_count=count_words(content),
    )
