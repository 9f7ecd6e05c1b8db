"""
Map Slack reactions on bot answers to a satisfaction sentiment.
"""
from faqbot.constants import NEGATIVE_REACTIONS, POSITIVE_REACTIONS
from faqbot.models import Sentiment


def base_reaction_name(reaction_name: str | None) -> str:
    """Drop a skin-tone modifier: 'thumbsup::skin-tone-2' -> 'thumbsup'."""
    return (reaction_name or "").split("::", 1)[0]


def classify(reaction_name: str, reacting_user_id: str, bot_user_id: str | None) -> Sentiment:
    # The bot adds thumbs up/down to its own answers as affordances; those must not count.
    if bot_user_id and reacting_user_id == bot_user_id:
        return Sentiment.IGNORED

    name = base_reaction_name(reaction_name)
    if name in POSITIVE_REACTIONS:
        return Sentiment.POSITIVE
    if name in NEGATIVE_REACTIONS:
        return Sentiment.NEGATIVE
    return Sentiment.IGNORED
