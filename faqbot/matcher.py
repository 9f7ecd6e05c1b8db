"""
FAQ matching.

Scores each candidate question against the incoming message in tiers:
exact phrasing (100) beats substring containment (50), which beats partial
keyword overlap (up to 30). The best candidate is accepted only when its
score is strictly above MATCH_ACCEPTANCE_THRESHOLD.
"""
from typing import Iterable

from faqbot.constants import (
    EXACT_MATCH_SCORE,
    MATCH_ACCEPTANCE_THRESHOLD,
    SUBSTRING_MATCH_SCORE,
    WORD_OVERLAP_MAX_SCORE,
)
from faqbot.logger import logger
from faqbot.models import FaqEntry, MatchResult
from faqbot.utils import normalize, qualifying_tokens


def score_question(search_text: str, faq_question: str) -> float:
    """
    Score one normalized FAQ question against the normalized message.
    """
    if faq_question == search_text:
        return EXACT_MATCH_SCORE

    if search_text in faq_question or faq_question in search_text:
        return SUBSTRING_MATCH_SCORE

    tokens = qualifying_tokens(search_text)
    if not tokens:
        return 0
    matches = sum(1 for token in tokens if token in faq_question)
    return (matches / len(tokens)) * WORD_OVERLAP_MAX_SCORE


def match(message_text: str, candidates: Iterable[FaqEntry]) -> MatchResult:
    """
    Pick the best FAQ for a message.

    Candidates are scanned in the given order. The first exact match wins
    immediately; otherwise a candidate only replaces the current best when its
    score is strictly higher, so ties go to the earlier candidate.
    """
    search_text = normalize(message_text)
    best_faq = None
    best_score = 0

    for faq in candidates:
        faq_question = normalize(faq.question)
        score = score_question(search_text, faq_question)
        logger.debug(f'Comparing "{search_text}" with "{faq_question}": {score}')

        if score > best_score:
            best_faq = faq
            best_score = score

        if score == EXACT_MATCH_SCORE:
            break

    if best_faq is not None and best_score > MATCH_ACCEPTANCE_THRESHOLD:
        return MatchResult(faq=best_faq, score=best_score)

    return MatchResult(faq=None, score=best_score)
