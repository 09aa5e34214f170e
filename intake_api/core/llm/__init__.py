"""Completion provider integration.

Kept deliberately small:
- One request per call: no retry, no streaming, no conversation state.
- Prompts and model output are never logged here; the intake pipeline decides what to log.
- Configuration arrives as an explicit `CompletionConfig`, never read at call time.
"""
