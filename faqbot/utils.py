import re

from faqbot.constants import MIN_TOKEN_LENGTH


def normalize(text: str | None) -> str:
    """Lower-case and trim text for comparison."""
    return (text or "").lower().strip()


def tokenize(text: str | None) -> list[str]:
    """
    Split normalized text on whitespace.
    No stemming and no punctuation stripping: "access?" stays "access?".
    """
    return normalize(text).split()


def qualifying_tokens(text: str | None) -> list[str]:
    """Tokens long enough to count towards word-overlap scoring."""
    return [token for token in tokenize(text) if len(token) >= MIN_TOKEN_LENGTH]


def strip_leading_mention(text: str) -> str:
    """
    Remove a leading Slack user mention like '<@U123ABC>' plus any following whitespace.
    People often address the bot directly; the mention is not part of the question.
    """
    return re.sub(r"^<@[^>]+>\s*", "", text or "").strip()


SLACK_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def sanitize_slack_id(identifier: str | None, name: str = "identifier") -> str:
    """
    Check a user or channel id before it is written to MongoDB.
    Anything outside the Slack id alphabet (e.g. "$ne", "{...}") raises ValueError.
    """
    if not isinstance(identifier, str):
        raise ValueError(f"{name} must be a string, got {type(identifier).__name__}")

    identifier = identifier.strip()
    if not SLACK_ID_PATTERN.match(identifier):
        raise ValueError(f"Invalid {name}: {identifier!r}")
    return identifier
