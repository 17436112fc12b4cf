"""User intent categories for the sample triage setup."""

from enum import Enum

from chatwidgets.agents.classifier import CompletionClassifier
from chatwidgets.services.completion import CompletionClient


class UserIntent(str, Enum):
    HELP_REQUEST = "HelpRequest"
    DATA_QUERY = "DataQuery"
    ACTION_REQUEST = "ActionRequest"
    FEEDBACK = "Feedback"
    UNKNOWN = "Unknown"


INTENT_DESCRIPTIONS = {
    UserIntent.HELP_REQUEST: "User needs help, assistance, support, or troubleshooting",
    UserIntent.DATA_QUERY: "User wants data, information, facts, statistics, or knowledge",
    UserIntent.ACTION_REQUEST: "User wants something done, executed, created, modified, or deleted",
    UserIntent.FEEDBACK: "User is giving feedback, suggestions, complaints, or compliments",
}


class UserIntentClassifier(CompletionClassifier[UserIntent]):
    """Classifies messages into ``UserIntent`` values."""

    def __init__(self, completion: CompletionClient):
        super().__init__(
            completion,
            categories=UserIntent,
            unknown=UserIntent.UNKNOWN,
            descriptions=INTENT_DESCRIPTIONS,
        )
