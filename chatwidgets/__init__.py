"""Chat widgets core.

Conversation threads with bounded-context summarization, and a
classify-and-dispatch (triage) pipeline for routing chat requests to
specialized agents.
"""

__version__ = "0.1.0"
