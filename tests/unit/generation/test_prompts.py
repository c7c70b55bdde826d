"""Tests for RAG prompt construction."""

import pytest

from doctalk.core import DocumentChunk, RetrievalResult
from doctalk.generation import INFO_NOT_FOUND, SYSTEM_PROMPT, build_rag_prompt, is_info_not_found


def result(text, source, score=0.9):
    return RetrievalResult(chunk=DocumentChunk(text=text, source=source), score=score)


class TestBuildRagPrompt:
    def test_numbered_excerpts_with_file_names(self):
        prompt = build_rag_prompt(
            "When is the launch?",
            [result("Launch is in May.", "/docs/plan.pdf"), result("Budget is 10k.", "/docs/a.txt")],
        )

        assert "[Excerpt 1] (plan.pdf)\nLaunch is in May." in prompt
        assert "[Excerpt 2] (a.txt)\nBudget is 10k." in prompt
        assert prompt.endswith("Question: When is the launch?\nAnswer:")

    def test_system_prompt_names_marker(self):
        assert INFO_NOT_FOUND in SYSTEM_PROMPT


class TestIsInfoNotFound:
    @pytest.mark.parametrize("answer", ["", "   ", "INFO NOT FOUND", "info not found.", " INFO NOT FOUND in excerpts"])
    def test_declined(self, answer):
        assert is_info_not_found(answer)

    @pytest.mark.parametrize("answer", ["Paris", "The info was not found in 2020 but later."])
    def test_answered(self, answer):
        assert not is_info_not_found(answer)
