"""Completion collaborator: LLM adapters, prompt building and model catalog."""
