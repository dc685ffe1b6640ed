from inboxd.preprocess import (
    MediaKind,
    PreprocessingRule,
    ProcessingHints,
    RuleAction,
    RuleCondition,
    run_preprocessing,
)


def short_text_rule():
    return PreprocessingRule(
        name="short_text",
        condition=RuleCondition.TEXT_WORD_COUNT_LT,
        threshold=5,
        action=RuleAction.FORCE_WEB_SEARCH,
        llm_hint="Short text — search the web.",
    )


def image_tag_rule():
    return PreprocessingRule(
        name="image_tag",
        condition=RuleCondition.HAS_IMAGE_ATTACHMENT,
        action=RuleAction.ADD_TAG,
        tag="image",
    )


def test_no_rules_returns_default_hints():
    hints = run_preprocessing("hello world", [], [])
    assert hints == ProcessingHints()
    assert hints.force_web_search is False
    assert hints.extra_llm_hints == []
    assert hints.suggested_tags == []


def test_short_text_triggers_force_web_search():
    hints = run_preprocessing("hi", [], [short_text_rule()])
    assert hints.force_web_search is True
    assert hints.extra_llm_hints == ["Short text — search the web."]


def test_long_text_does_not_trigger_short_text_rule():
    hints = run_preprocessing("one two three four five six", [], [short_text_rule()])
    assert hints.force_web_search is False


def test_image_attachment_triggers_add_tag():
    hints = run_preprocessing("look at this", [MediaKind.IMAGE], [image_tag_rule()])
    assert hints.suggested_tags == ["image"]


def test_no_image_does_not_trigger_image_rule():
    hints = run_preprocessing("text only", [], [image_tag_rule()])
    assert hints.suggested_tags == []


def test_duplicate_suggested_tags_deduplicated():
    rule2 = image_tag_rule()
    rule2.name = "image_tag2"
    hints = run_preprocessing(
        "hi", [MediaKind.IMAGE, MediaKind.IMAGE], [image_tag_rule(), rule2]
    )
    assert hints.suggested_tags == ["image"]


def test_has_attachment_condition_matches_any_attachment():
    rule = PreprocessingRule(
        name="any_attachment",
        condition=RuleCondition.HAS_ATTACHMENT,
        action=RuleAction.ADD_LLM_HINT,
        llm_hint="Message has an attachment.",
    )
    hints = run_preprocessing("doc", [MediaKind.DOCUMENT], [rule])
    assert hints.extra_llm_hints == ["Message has an attachment."]


def test_suggested_tags_normalized_to_lowercase():
    rule = PreprocessingRule(
        name="img",
        condition=RuleCondition.HAS_IMAGE_ATTACHMENT,
        action=RuleAction.ADD_TAG,
        tag="IMAGE",
    )
    hints = run_preprocessing("photo", [MediaKind.IMAGE], [rule])
    assert hints.suggested_tags == ["image"]


def test_word_count_without_threshold_always_matches():
    rule = PreprocessingRule(
        name="always",
        condition=RuleCondition.TEXT_WORD_COUNT_LT,
        action=RuleAction.FORCE_WEB_SEARCH,
    )
    hints = run_preprocessing("many words in this message here", [], [rule])
    assert hints.force_web_search is True
    assert hints.extra_llm_hints == []