"""
AI Module - Text generation for landing pages.

Module Structure:
================
- providers/: AI provider clients (Gemini)
- prompts/: Prompt templates for generating and editing pages
- monitoring/: Structured request/response logging

Flow:
=====
1. Router receives a brief or an edit instruction
2. prompts/ turns it into a (system_prompt, user_prompt) pair
3. GenerationService sends it through a provider
4. The generated HTML goes back to the caller
"""

__version__ = "2.0.0"
