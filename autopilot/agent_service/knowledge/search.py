"""Lexical search over the curated knowledge corpus.

Ranking is Okapi BM25 over each entry's title, domain, summary, takeaways
and keywords.  Results are deterministic: ties keep corpus order.
"""

from __future__ import annotations

import math
import re
from functools import lru_cache
from importlib import resources
from typing import TYPE_CHECKING

from pydantic import TypeAdapter

from autopilot.agent_service.models.knowledge import KnowledgeEntry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from autopilot.agent_service.models.enums import KnowledgeDomain

# BM25 hyperparameters (standard defaults)
BM25_K1 = 1.5
BM25_B = 0.75

DEFAULT_LIMIT = 3

_STOPWORDS = frozenset(
    "a an and are as at be by can do for from how i in into is it me my of on or our so that the this "
    "to up us we what when with you your".split()
)

_ENTRIES_ADAPTER = TypeAdapter(list[KnowledgeEntry])


def tokenize_text(text: str) -> list[str]:
    """Lowercase word tokens with stopwords removed."""
    return [tok for tok in re.findall(r"\w+", text.lower()) if tok not in _STOPWORDS]


def compute_bm25_scores(
    query_tokens: Sequence[str],
    documents: list[list[str]],
    k1: float = BM25_K1,
    b: float = BM25_B,
) -> list[float]:
    """Compute BM25 relevance scores for documents against query tokens."""
    if not query_tokens or not documents:
        return [0.0 for _ in documents]

    n_docs = len(documents)
    avgdl = sum(len(doc) for doc in documents) / float(n_docs)

    doc_freq: dict[str, int] = {}
    for doc in documents:
        for tok in set(doc):
            doc_freq[tok] = doc_freq.get(tok, 0) + 1

    scores: list[float] = []
    for doc in documents:
        tf: dict[str, int] = {}
        for tok in doc:
            tf[tok] = tf.get(tok, 0) + 1

        score = 0.0
        for tok in set(query_tokens):
            df = doc_freq.get(tok, 0)
            freq = tf.get(tok, 0)
            if df == 0 or freq == 0:
                continue
            idf = math.log(1 + (n_docs - df + 0.5) / (df + 0.5))
            denom = freq + k1 * (1 - b + b * (len(doc) / (avgdl or 1.0)))
            score += idf * (freq * (k1 + 1)) / denom
        scores.append(score)

    return scores


def _entry_tokens(entry: KnowledgeEntry) -> list[str]:
    parts = [entry.title, entry.domain.value, entry.summary, *entry.takeaways, *entry.keywords]
    return tokenize_text(" ".join(parts))


class KnowledgeBase:
    """Read-only, in-memory knowledge corpus."""

    def __init__(self, entries: Sequence[KnowledgeEntry]) -> None:
        self._entries = list(entries)
        self._documents = [_entry_tokens(entry) for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[KnowledgeEntry]:
        return list(self._entries)

    def search(
        self,
        query: str,
        domain: KnowledgeDomain | None = None,
        *,
        limit: int = DEFAULT_LIMIT,
    ) -> list[KnowledgeEntry]:
        """Return up to ``limit`` entries relevant to ``query``, best first.

        An empty query, or one with no matching terms, returns ``[]``.
        ``domain`` restricts the candidates before scoring.
        """
        query_tokens = tokenize_text(query or "")
        if not query_tokens or limit <= 0:
            return []

        candidates = [
            (idx, entry, doc)
            for idx, (entry, doc) in enumerate(zip(self._entries, self._documents, strict=True))
            if domain is None or entry.domain == domain
        ]
        if not candidates:
            return []

        scores = compute_bm25_scores(query_tokens, [doc for _, _, doc in candidates])
        ranked = sorted(
            ((score, idx, entry) for score, (idx, entry, _) in zip(scores, candidates, strict=True) if score > 0),
            key=lambda item: (-item[0], item[1]),
        )
        return [entry for _, _, entry in ranked[:limit]]


def load_corpus(text: str | bytes) -> list[KnowledgeEntry]:
    """Parse and validate a JSON knowledge corpus."""
    return _ENTRIES_ADAPTER.validate_json(text)


@lru_cache(maxsize=1)
def load_knowledge_base() -> KnowledgeBase:
    """Return the knowledge base built from the packaged corpus (cached)."""
    raw = resources.files("autopilot.agent_service.knowledge").joinpath("corpus.json").read_bytes()
    return KnowledgeBase(load_corpus(raw))
