"""Curated knowledge corpus and its lexical search."""

from autopilot.agent_service.knowledge.search import KnowledgeBase, load_corpus, load_knowledge_base

__all__ = ["KnowledgeBase", "load_corpus", "load_knowledge_base"]
