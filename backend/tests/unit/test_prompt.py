"""Tests for prompt assembly."""

from cto_coach.chat.prompt import build_prompt


class TestBuildPrompt:
    """Prompt text handed to the LLM."""

    def test_no_documents_omits_context(self):
        """Without documents there is no context block and no citation instruction."""
        prompt = build_prompt("How do I hire?", [])
        assert "You are an expert CTO coach" in prompt
        assert "User question: How do I hire?" in prompt
        assert "Context from knowledge base" not in prompt
        assert "According to [Document Title]" not in prompt
        assert "Draw from your knowledge" in prompt

    def test_documents_are_enumerated_in_order(self, document_factory):
        """Each document is numbered in the order given, with its metadata."""
        first = document_factory(
            id=7,
            title="Code Review Guide",
            content="Reviews catch bugs early. Keep pull requests small.",
            summary="Reviews catch bugs early.",
            category="Quality",
            tags=["testing", "git"],
        )
        second = document_factory(id=3, title="Empty Doc", content="", summary="", tags=[])

        prompt = build_prompt("How should we review code?", [first, second])

        assert "Context from knowledge base (2 relevant documents found):" in prompt
        assert "Document 1: Code Review Guide" in prompt
        assert "Category: Quality" in prompt
        assert "Tags: testing, git" in prompt
        assert "Summary: Reviews catch bugs early." in prompt
        assert "Relevant Content: Reviews catch bugs early." in prompt
        assert "Document 2: Empty Doc" in prompt
        assert "Tags: None" in prompt
        assert "Summary: No summary available" in prompt
        assert prompt.index("Document 1:") < prompt.index("Document 2:")

    def test_question_is_literal_and_citation_requested(self, document_factory):
        """The user question is included verbatim, followed by the citation format."""
        doc = document_factory(title="Guide", content="Some long enough sentence here.")
        question = "What about {braces} and 100% coverage?"
        prompt = build_prompt(question, [doc])
        assert f"User question: {question}" in prompt
        assert prompt.index("User question:") < prompt.index("According to [Document Title]...")
