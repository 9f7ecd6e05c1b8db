"""
Follow-up flow after a negative reaction.

Each user is either idle or awaiting a detailed explanation in one thread.
A second negative reaction re-arms (overwrites) the pending entry; the user's
next reply in that thread is stored as negative feedback and returns them
to idle.
"""
import time
from typing import Callable, Optional

from faqbot.constants import FEEDBACK_PROMPT_MESSAGE, FEEDBACK_THANKS_MESSAGE
from faqbot.logger import logger
from faqbot.models import FeedbackRecord, MessageEvent, PendingFollowup
from faqbot.session_store import SessionStore
from faqbot.side_effects import dispatch, persist


class FeedbackStateTracker:
    def __init__(
        self,
        sessions: SessionStore,
        store,
        messenger,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            sessions: Where pending follow-ups live, keyed by user id
            store: FaqStore used to append the detailed feedback
            messenger: SlackMessenger used for the prompt and the thank-you
            ttl_seconds: Pending follow-ups older than this are dropped; None keeps them forever
            clock: Time source in seconds
        """
        self.sessions = sessions
        self.store = store
        self.messenger = messenger
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def pending_for(self, user_id: str) -> Optional[PendingFollowup]:
        pending = self.sessions.get(user_id)
        if pending is None:
            return None
        if self.ttl_seconds is not None and self.clock() - pending.created_at > self.ttl_seconds:
            logger.info("Pending feedback follow-up for user %s expired", user_id)
            self.sessions.delete(user_id)
            return None
        return pending

    def is_awaiting(self, user_id: str) -> bool:
        return self.pending_for(user_id) is not None

    def accepts(self, event: MessageEvent) -> bool:
        """True if the message is the awaited reply: same user, same channel, same thread."""
        pending = self.pending_for(event.user_id)
        if pending is None or not event.thread_id:
            return False
        return event.channel_id == pending.channel_id and event.thread_id == pending.thread_id

    async def arm(self, user_id: str, channel_id: str, thread_id: str) -> PendingFollowup:
        pending = PendingFollowup(channel_id=channel_id, thread_id=thread_id, created_at=self.clock())
        if self.sessions.get(user_id) is not None:
            logger.debug("Replacing pending feedback follow-up for user %s", user_id)
        self.sessions.set(user_id, pending)
        logger.info("Awaiting feedback details from user %s in %s/%s", user_id, channel_id, thread_id)

        await dispatch(
            self.messenger.post_threaded_message(channel_id, thread_id, FEEDBACK_PROMPT_MESSAGE)
        )
        return pending

    async def capture(self, event: MessageEvent) -> Optional[FeedbackRecord]:
        pending = self.pending_for(event.user_id)
        if pending is None:
            return None
        self.sessions.delete(event.user_id)

        record = FeedbackRecord(
            user_id=event.user_id,
            channel_id=event.channel_id,
            satisfaction=False,
            feedback_text=event.text,
        )
        logger.info("Captured feedback details from user %s", event.user_id)
        await persist(self.store.append_feedback, record)
        await dispatch(
            self.messenger.post_threaded_message(
                pending.channel_id, pending.thread_id, FEEDBACK_THANKS_MESSAGE
            )
        )
        return record
