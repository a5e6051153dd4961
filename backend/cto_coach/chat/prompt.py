"""Prompt assembly for the CTO coach."""

from collections.abc import Sequence

from cto_coach.documents.models import Document
from cto_coach.documents.scoring import extract_relevant_content

ROLE_PREAMBLE = (
    "You are an expert CTO coach providing guidance on engineering leadership,\n"
    "software architecture, and technology strategy."
)

NO_CONTEXT_INSTRUCTION = (
    "Provide helpful, practical advice as a CTO would. Draw from your knowledge\n"
    "of engineering best practices, leadership principles, and technology trends."
)

CITATION_INSTRUCTION = (
    "Provide helpful, practical advice as a CTO would. Reference the provided\n"
    "context when relevant and cite the document titles in your response.\n"
    'When citing sources, use the format: "According to [Document Title]..."\n'
    'or "As mentioned in [Document Title]...". Be specific about which document\n'
    "you're referencing."
)


def format_document(index: int, document: Document, question: str) -> str:
    """Render one context entry, numbered from 1."""
    tags = ", ".join(document.tags) if document.tags else "None"
    return "\n".join(
        [
            f"Document {index}: {document.title}",
            f"Category: {document.category or 'General'}",
            f"Tags: {tags}",
            f"Summary: {document.summary or 'No summary available'}",
            f"Relevant Content: {extract_relevant_content(document.content, question)}",
        ]
    )


def build_prompt(question: str, documents: Sequence[Document]) -> str:
    """Assemble the single text prompt handed to the LLM.

    Documents are rendered in the order given. Without documents the context
    block is left out and a shorter closing instruction is used.
    """
    if not documents:
        return f"{ROLE_PREAMBLE}\n\nUser question: {question}\n\n{NO_CONTEXT_INSTRUCTION}\n"

    context = "\n\n".join(
        format_document(index, document, question) for index, document in enumerate(documents, start=1)
    )
    return (
        f"{ROLE_PREAMBLE}\n\n"
        f"Context from knowledge base ({len(documents)} relevant documents found):\n"
        f"{context}\n\n"
        f"User question: {question}\n\n"
        f"{CITATION_INSTRUCTION}\n"
    )
