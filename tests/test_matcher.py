"""Tests for FAQ scoring and best-match selection."""

import pytest

from faqbot.matcher import match, score_question
from faqbot.models import FaqEntry


def faq(faq_id, question):
    return FaqEntry(id=faq_id, question=question, answer=f"answer {faq_id}")


class TestScoreQuestion:
    def test_exact(self):
        assert score_question("how do i get a badge?", "how do i get a badge?") == 100

    def test_message_inside_question(self):
        assert score_question("monitor", "how do i request a new monitor?") == 50

    def test_question_inside_message(self):
        assert score_question("hi, how do i set up zoom? thanks", "how do i set up zoom?") == 50

    def test_word_overlap_is_proportional(self):
        assert score_question("need new vpn access", "how do i request vpn access?") == pytest.approx(15)

    def test_no_qualifying_tokens_scores_zero(self):
        assert score_question("is it ok", "how do i reset my password?") == 0


class TestMatch:
    def test_empty_candidates(self):
        result = match("anything", [])
        assert result.faq is None
        assert result.score == 0

    def test_exact_match_short_circuits_to_first_candidate(self):
        first = faq("1", "How do I get a badge?")
        second = faq("2", "how do i get a badge?")
        result = match("How do I get a badge?", [first, second])
        assert result.faq is first
        assert result.score == 100

    def test_exact_match_stops_scanning(self):
        class Exploding:
            @property
            def question(self):
                raise AssertionError("scanned past an exact match")

        first = faq("1", "where is the cafeteria")
        result = match("Where is the cafeteria", [first, Exploding()])
        assert result.faq is first

    def test_substring_match_is_accepted(self):
        monitor = faq("2", "How do I request a new monitor?")
        result = match("monitor", [faq("1", "How do I reset my password?"), monitor])
        assert result.faq is monitor
        assert result.score == 50

    def test_later_exact_match_beats_earlier_substring(self):
        substring = faq("1", "How do I request a new monitor for home?")
        exact = faq("2", "request a new monitor")
        result = match("Request a new monitor", [substring, exact])
        assert result.faq is exact
        assert result.score == 100

    def test_ties_go_to_earlier_candidate(self):
        first = faq("1", "How do I request a new monitor?")
        second = faq("2", "Who approves a monitor purchase?")
        result = match("monitor", [first, second])
        assert result.faq is first

    def test_word_overlap_below_floor_is_rejected(self):
        result = match("what time", [faq("1", "How do I reset my password?")])
        assert result.faq is None
        assert result.score == 0

    def test_word_overlap_above_floor_is_accepted(self):
        vpn = faq("3", "How do I request VPN access?")
        result = match("need new vpn access", [vpn])
        assert result.faq is vpn
        assert result.score == pytest.approx(15)

    def test_score_exactly_at_floor_is_rejected(self):
        # 1 of 3 qualifying tokens -> (1/3) * 30 == 10
        result = match("payroll holiday schedule", [faq("1", "When is payroll processed?")])
        assert result.faq is None
        assert result.score == pytest.approx(10)

    def test_higher_overlap_replaces_lower(self):
        weak = faq("1", "How do I request a laptop?")
        strong = faq("2", "How do I request VPN access?")
        result = match("request access to vpn", [weak, strong])
        assert result.faq is strong
        assert result.score == pytest.approx(30)

    def test_accepted_scores_are_always_above_floor(self, sample_faqs):
        messages = ["monitor", "what time", "need new vpn access", "password", "hello there", "a b c"]
        for message in messages:
            result = match(message, sample_faqs)
            if result.faq is not None:
                assert result.score > 10
