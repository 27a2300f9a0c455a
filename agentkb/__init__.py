"""Record model, JSONL storage and helpers for a knowledge base for AI coding agents."""

__version__ = "0.3.0"