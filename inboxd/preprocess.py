"""Rule-based pre-processing that produces hints for later pipeline stages."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class MediaKind(str, Enum):
    """Broad kind of an attachment."""

    IMAGE = "image"
    DOCUMENT = "document"
    AUDIO = "audio"
    VIDEO = "video"
    VOICE_MESSAGE = "voice_message"


class RuleCondition(str, Enum):
    """When a pre-processing rule applies."""

    TEXT_WORD_COUNT_LT = "text_word_count_lt"
    HAS_IMAGE_ATTACHMENT = "has_image_attachment"
    HAS_ATTACHMENT = "has_attachment"


class RuleAction(str, Enum):
    """What a matching pre-processing rule does."""

    FORCE_WEB_SEARCH = "force_web_search"
    ADD_TAG = "add_tag"
    ADD_LLM_HINT = "add_llm_hint"


@dataclass
class PreprocessingRule:
    """A single configured pre-processing rule."""

    name: str
    condition: RuleCondition
    action: RuleAction
    threshold: int | None = None
    tag: str | None = None
    llm_hint: str | None = None


@dataclass
class ProcessingHints:
    """Hints accumulated from all matching rules."""

    force_web_search: bool = False
    extra_llm_hints: list[str] = field(default_factory=list)
    suggested_tags: list[str] = field(default_factory=list)


def _condition_matches(
    rule: PreprocessingRule, text: str, media_kinds: list[MediaKind]
) -> bool:
    if rule.condition is RuleCondition.TEXT_WORD_COUNT_LT:
        return rule.threshold is None or len(text.split()) < rule.threshold
    if rule.condition is RuleCondition.HAS_IMAGE_ATTACHMENT:
        return MediaKind.IMAGE in media_kinds
    if rule.condition is RuleCondition.HAS_ATTACHMENT:
        return bool(media_kinds)
    raise ValueError(f"unknown rule condition: {rule.condition!r}")


def _apply_action(rule: PreprocessingRule, hints: ProcessingHints) -> None:
    if rule.action is RuleAction.FORCE_WEB_SEARCH:
        hints.force_web_search = True
    elif rule.action is RuleAction.ADD_TAG:
        if rule.tag is not None:
            normalized = rule.tag.lower()
            if normalized not in hints.suggested_tags:
                hints.suggested_tags.append(normalized)
    elif rule.action is not RuleAction.ADD_LLM_HINT:
        raise ValueError(f"unknown rule action: {rule.action!r}")
    if rule.llm_hint is not None:
        hints.extra_llm_hints.append(rule.llm_hint)


def run_preprocessing(
    text: str,
    media_kinds: Iterable[MediaKind],
    rules: Iterable[PreprocessingRule],
) -> ProcessingHints:
    """Apply every matching rule, in order, to a message.

    ``media_kinds`` holds the kind of each attachment of the message.
    All matching rules contribute; it is not first-match-wins.
    """
    kinds = list(media_kinds)
    hints = ProcessingHints()
    for rule in rules:
        if _condition_matches(rule, text, kinds):
            logger.debug(
                "Pre-processing rule matched: rule=%s condition=%s",
                rule.name,
                rule.condition.value,
            )
            _apply_action(rule, hints)
    return hints