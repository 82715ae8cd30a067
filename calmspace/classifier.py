"""Keyword-based responses for the chat companion.

The companion does not understand language. It lower-cases the message and
looks for keyword substrings, checking a fixed crisis list first and then each
rule in table order. Substring matching means keywords also fire inside longer
words ("studying" matches "study", "fighter" matches "fight"). Known
limitation; whole-word matching would change which replies users get.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from calmspace.models import Classification, ClassificationRule, ResponseCategory

log = logging.getLogger(__name__)

CRISIS_KEYWORDS: tuple[str, ...] = (
    "suicide",
    "kill myself",
    "end it all",
    "want to die",
    "hurt myself",
)

CRISIS_RESPONSE = (
    "I'm really concerned about you right now. Your life has value and you deserve "
    "support. Please reach out to AASRA at 91-22-27546669 or talk to a trusted adult "
    "immediately. I'm here with you, and you don't have to face this alone. \U0001fac2"
)

RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        category=ResponseCategory.ACADEMIC_STRESS,
        keywords=("exam", "study", "marks", "pressure"),
        responses=(
            "Academic pressure can feel overwhelming, especially with family expectations. "
            "Remember, your worth isn't defined by marks alone. Take breaks, practice deep "
            "breathing, and talk to someone you trust. What specific part of studying is "
            "stressing you the most? \U0001f4da\U0001f499",
        ),
    ),
    ClassificationRule(
        category=ResponseCategory.FAMILY_CONFLICT,
        keywords=("parents", "family", "fight"),
        responses=(
            "Family conflicts are really tough, especially when you feel misunderstood. "
            "It's natural to feel frustrated when generations see things differently. "
            "Your feelings are valid. Sometimes, small conversations can help bridge gaps. "
            "Would you like to talk about what happened? \U0001f3e0\U0001f499",
        ),
    ),
    ClassificationRule(
        category=ResponseCategory.LONELINESS,
        keywords=("lonely", "alone", "friends"),
        responses=(
            "Feeling lonely is painful, and I want you to know that you're not actually "
            "alone - I'm here, and there are people who care about you. Building "
            "connections takes time, but you're worthy of friendship and love. What makes "
            "you feel most isolated? \U0001f917",
        ),
    ),
    ClassificationRule(
        category=ResponseCategory.ANXIETY,
        keywords=("anxious", "worried", "scared"),
        responses=(
            "Anxiety can feel overwhelming, like your heart is racing and thoughts are "
            "spinning. Try the 5-4-3-2-1 technique: name 5 things you see, 4 you can touch, "
            "3 you hear, 2 you smell, and 1 you taste. This helps ground you in the present "
            "moment. What's making you feel most anxious? \U0001f338",
        ),
    ),
)

FALLBACK_RESPONSES: tuple[str, ...] = (
    "I hear you, and I want you to know that what you're feeling is completely valid. "
    "Can you tell me more about what's going on? \U0001f499",
    "It sounds like you're going through something difficult right now. I'm here to "
    "listen without any judgment. What's weighing on your heart? \U0001fac2",
    "Thank you for trusting me with your feelings. You're showing real courage by "
    "reaching out. What would feel most helpful for you right now? \U0001f49a",
    "I can sense this is important to you. Your feelings matter, and I want to "
    "understand better. Can you help me see this from your perspective? \U0001f31f",
    "That sounds really challenging. It takes strength to share these feelings. What "
    "support do you need most right now? \U0001f499",
)


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_detailed(
    text: str,
    rng: Optional[random.Random] = None,
    rules: Sequence[ClassificationRule] = RULES,
) -> Classification:
    """Pick a response for ``text`` and report which category produced it."""
    normalized = text.casefold()

    # Crisis rules in the table only add keywords; they always run first.
    crisis_keywords = list(CRISIS_KEYWORDS)
    ordinary: list[ClassificationRule] = []
    for rule in rules:
        if rule.category is ResponseCategory.CRISIS:
            crisis_keywords.extend(k.casefold() for k in rule.keywords)
        else:
            ordinary.append(rule)

    if _contains_any(normalized, crisis_keywords):
        log.warning("Crisis language detected; returning crisis response")
        return Classification(category=ResponseCategory.CRISIS, response=CRISIS_RESPONSE)

    rng = rng or random.Random()
    for rule in ordinary:
        if _contains_any(normalized, [k.casefold() for k in rule.keywords]):
            log.debug("Matched rule %s", rule.category.value)
            return Classification(category=rule.category, response=rng.choice(rule.responses))

    log.debug("No rule matched; using a general response")
    return Classification(
        category=ResponseCategory.GENERAL, response=rng.choice(FALLBACK_RESPONSES)
    )


def classify(text: str, rng: Optional[random.Random] = None) -> str:
    """Return the companion's response to ``text``."""
    return classify_detailed(text, rng).response


class ResponseClassifier:
    """A rule table paired with its own random source.

    Pass ``seed`` to make fallback choices reproducible.
    """

    def __init__(
        self,
        rules: Sequence[ClassificationRule] = RULES,
        seed: Optional[int] = None,
    ) -> None:
        self.rules = tuple(rules)
        self._rng = random.Random(seed)

    def classify(self, text: str) -> Classification:
        return classify_detailed(text, self._rng, self.rules)
