"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send one chat completion to Groq and return its text content.
- Classify provider failures (rate limit, exhausted credits, transport).
"""
