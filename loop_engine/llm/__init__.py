"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Polish templated explanations with a short prompt.
- Fall back to the templates whenever the LLM is unavailable or misbehaves.
"""
