"""Free-text classification into a closed category set."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, Mapping, Optional, Type, TypeVar

from chatwidgets.core.errors import InvalidArgumentError
from chatwidgets.schemas.chat import ChatRole, ContextMessage
from chatwidgets.services.completion import CompletionClient

logger = logging.getLogger(__name__)

TCategory = TypeVar("TCategory")
TEnum = TypeVar("TEnum", bound=Enum)


class Classifier(ABC, Generic[TCategory]):
    """Maps free text to exactly one category.

    ``classify`` never fails: errors are handled internally and reported as
    the classifier's unknown category.
    """

    @abstractmethod
    async def classify(self, text: str) -> TCategory:
        """Classify text into one category."""


CLASSIFICATION_PROMPT = """Classify the following user message into EXACTLY ONE of these categories. Respond with ONLY the category name - nothing else.

Categories:
{categories}

If none of these categories fit, respond with: {unknown}

User message: {message}

Your response (category name only):"""


class CompletionClassifier(Classifier[TEnum]):
    """Enum classifier that asks the completion capability for a category name."""

    def __init__(
        self,
        completion: CompletionClient,
        categories: Type[TEnum],
        unknown: TEnum,
        descriptions: Optional[Mapping[TEnum, str]] = None,
    ):
        """Initialize classifier.

        Args:
            completion: Completion capability that makes the decision
            categories: Enum whose members form the category set
            unknown: Member returned when no category applies
            descriptions: Optional per-member descriptions for the prompt

        Raises:
            InvalidArgumentError: If unknown is not a member of categories
        """
        if not isinstance(unknown, categories):
            raise InvalidArgumentError(
                f"Unknown category {unknown!r} is not a member of {categories.__name__}",
                parameter="unknown",
            )
        self.completion = completion
        self.categories = categories
        self.unknown = unknown
        self.descriptions = dict(descriptions or {})
        self._lookup = {}
        for member in categories:
            self._lookup[member.name.lower()] = member
            self._lookup[self.label(member).lower()] = member

    @staticmethod
    def label(member: Enum) -> str:
        """Name shown to the model: the string value if there is one, else the member name."""
        return member.value if isinstance(member.value, str) else member.name

    def build_prompt(self, text: str) -> str:
        """Render the classification prompt for one message."""
        lines = []
        for member in self.categories:
            if member is self.unknown:
                continue
            line = f"- {self.label(member)}"
            description = self.descriptions.get(member)
            lines.append(f"{line}: {description}" if description else line)
        return CLASSIFICATION_PROMPT.format(
            categories="\n".join(lines),
            unknown=self.label(self.unknown),
            message=text,
        )

    def parse(self, raw: str) -> TEnum:
        """Match a response against category labels and member names, case-insensitively."""
        cleaned = raw.strip().strip("\"'`.").strip().lower()
        member = self._lookup.get(cleaned)
        if member is None:
            logger.warning(f"Unrecognized classification response: {raw!r}")
            return self.unknown
        return member

    async def classify(self, text: str) -> TEnum:
        if not text or not text.strip():
            return self.unknown

        try:
            response = await self.completion.complete(
                [ContextMessage(role=ChatRole.USER, content=self.build_prompt(text))]
            )
        except Exception as e:
            logger.error(f"Classification failed, using {self.label(self.unknown)}: {e}")
            return self.unknown

        category = self.parse(response.text or "")
        logger.info(f"Classified message as {self.label(category)}")
        return category
