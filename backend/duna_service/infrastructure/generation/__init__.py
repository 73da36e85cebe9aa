"""LLM generation infrastructure package."""

from .chat_completion_generator import ChatCompletionGenerator, strip_markdown_fences

__all__ = ["ChatCompletionGenerator", "strip_markdown_fences"]
