"""
Plain data types passed between the matcher, the feedback tracker and the store.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class FaqEntry:
    id: str
    question: str
    answer: str
    category: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class MatchResult:
    faq: Optional[FaqEntry]
    score: float

    @property
    def matched(self) -> bool:
        return self.faq is not None


@dataclass(frozen=True)
class MessageEvent:
    """A Slack `message` event. `thread_id` is the thread root ts for threaded replies."""

    text: str
    user_id: str
    channel_id: str
    thread_id: Optional[str] = None
    is_from_bot: bool = False
    message_id: Optional[str] = None


@dataclass(frozen=True)
class ReactionEvent:
    """
    A Slack `reaction_added` event.
    `target_author_id` is the author of the reacted message when Slack provides it.
    """

    reaction_name: str
    user_id: str
    target_message_ts: str
    channel_id: str
    target_author_id: Optional[str] = None


@dataclass(frozen=True)
class UnknownEvent:
    event_type: str


InboundEvent = Union[MessageEvent, ReactionEvent, UnknownEvent]


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    IGNORED = "ignored"


@dataclass(frozen=True)
class ConversationRecord:
    user_id: str
    channel_id: str
    user_message: str
    bot_response: str
    matched_faq_id: Optional[str]
    response_type: str
    response_time_ms: int


@dataclass(frozen=True)
class FeedbackRecord:
    user_id: str
    channel_id: str
    satisfaction: bool
    feedback_text: str


@dataclass(frozen=True)
class PendingFollowup:
    channel_id: str
    thread_id: str
    created_at: float


@dataclass(frozen=True)
class PostResult:
    ok: bool
    message_id: Optional[str] = None
