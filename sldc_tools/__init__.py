"""Code explanation, unit-test generation and security review over an LLM."""

__version__ = "1.0.0"
