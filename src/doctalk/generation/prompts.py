"""RAG prompt templates for document Q&A."""

from pathlib import Path

from doctalk.core import RetrievalResult

INFO_NOT_FOUND = "INFO NOT FOUND"

SYSTEM_PROMPT = f"""You are a helpful assistant that answers questions about the user's documents.

Guidelines:
- Answer based ONLY on the provided excerpts
- Do not mention the excerpts or where the knowledge comes from, just answer
- Be concise but complete
- If the excerpts do not contain the answer, reply exactly with '{INFO_NOT_FOUND}'"""


RAG_PROMPT_TEMPLATE = """Facts:
{context}
======
Given only the facts above, answer the question in a single paragraph.

Question: {query}
Answer:"""


def build_rag_prompt(query: str, results: list[RetrievalResult]) -> str:
    """Build RAG prompt from query and retrieved results."""
    context_parts = []
    for i, result in enumerate(results, 1):
        chunk = result.chunk
        name = Path(chunk.source).name or "unknown"
        context_parts.append(f"[Excerpt {i}] ({name})\n{chunk.text}")

    context = "\n\n".join(context_parts)
    return RAG_PROMPT_TEMPLATE.format(context=context, query=query)


def is_info_not_found(answer: str) -> bool:
    """Check if the model declined to answer."""
    return not answer.strip() or answer.strip().upper().startswith(INFO_NOT_FOUND)
