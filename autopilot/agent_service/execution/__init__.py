"""Execution pipeline for the agent service.

This package contains the per-turn components:

- **conversation**: Message history -> transcript text
- **prompt**: System prompt (Jinja2, from workspace) and prompt payload composition
- **generation**: Schema-constrained model call (pydantic-ai)
- **merge**: Prior workspace + generated snapshot -> new workspace
- **coordinator**: Turn orchestration (retrieve -> compose -> generate -> merge)
"""
