"""
Routes inbound Slack events through the matcher and the feedback flow.
"""
import time
from typing import Optional

from starlette.concurrency import run_in_threadpool

from faqbot.constants import (
    ESCALATION_MESSAGE,
    FAQ_UNAVAILABLE_MESSAGE,
    FEEDBACK_REACTIONS,
    GENERIC_ERROR_MESSAGE,
    RESPONSE_TYPE_FAQ_MATCH,
    RESPONSE_TYPE_NO_MATCH,
    THREAD_ROOTS_MAX_ITEMS,
)
from faqbot.exceptions import StoreReadFailure
from faqbot.feedback_state import FeedbackStateTracker
from faqbot.logger import logger
from faqbot.matcher import match
from faqbot.models import (
    ConversationRecord,
    FeedbackRecord,
    InboundEvent,
    MessageEvent,
    ReactionEvent,
    Sentiment,
    UnknownEvent,
)
from faqbot.reactions import base_reaction_name, classify
from faqbot.session_store import InMemorySessionStore, SessionStore
from faqbot.side_effects import dispatch, persist


def answer_key(channel_id: str, message_id: str) -> str:
    return f"{channel_id}:{message_id}"


class ConversationOrchestrator:
    def __init__(
        self,
        store,
        messenger,
        tracker: FeedbackStateTracker,
        thread_roots: Optional[SessionStore] = None,
        add_feedback_reactions: bool = True,
    ):
        self.store = store
        self.messenger = messenger
        self.tracker = tracker
        # Thread root of each threaded answer, keyed by answer_key(channel, answer ts)
        self.thread_roots = (
            thread_roots if thread_roots is not None else InMemorySessionStore(max_items=THREAD_ROOTS_MAX_ITEMS)
        )
        self.add_feedback_reactions = add_feedback_reactions

    async def handle(self, event: InboundEvent, bot_user_id: Optional[str] = None):
        if isinstance(event, MessageEvent):
            return await self.handle_message(event)
        if isinstance(event, ReactionEvent):
            return await self.handle_reaction(event, bot_user_id)
        if isinstance(event, UnknownEvent):
            logger.debug("Ignoring event: %s", event.event_type)
            return None
        raise TypeError(f"Unsupported event: {event!r}")

    async def handle_message(self, event: MessageEvent) -> Optional[ConversationRecord]:
        """
        Answer a user's message, or consume it as feedback details when the
        user was asked to explain a negative reaction in this thread.

        Returns the ConversationRecord for answered messages, None otherwise.
        """
        if event.is_from_bot or not event.text.strip():
            return None

        if self.tracker.accepts(event):
            await self.tracker.capture(event)
            return None

        logger.info("Processing message from user %s in channel %s", event.user_id, event.channel_id)
        try:
            return await self._answer(event)
        except Exception:  # noqa: BLE001 - any failure ends in an apology, never a crash
            logger.exception("Error processing message from user %s", event.user_id)
            await dispatch(self._reply(event, GENERIC_ERROR_MESSAGE))
            return None

    async def _answer(self, event: MessageEvent) -> Optional[ConversationRecord]:
        started = time.perf_counter()

        try:
            faqs = await run_in_threadpool(self.store.list_active_faqs)
        except StoreReadFailure as e:
            logger.error("Error fetching FAQs: %s", e)
            await dispatch(self._reply(event, FAQ_UNAVAILABLE_MESSAGE))
            return None

        result = match(event.text, faqs)
        if result.matched:
            logger.info(f"Best match: {result.faq.question} (score {result.score:.1f})")
            response_text = result.faq.answer
        else:
            logger.info(f"No FAQ matched (best score {result.score:.1f}), escalating")
            response_text = ESCALATION_MESSAGE

        posted = await dispatch(self._reply(event, response_text))
        response_time_ms = int((time.perf_counter() - started) * 1000)

        if posted is not None and posted.message_id:
            if event.thread_id:
                self.thread_roots.set(answer_key(event.channel_id, posted.message_id), event.thread_id)
            if self.add_feedback_reactions:
                for reaction_name in FEEDBACK_REACTIONS:
                    await dispatch(
                        self.messenger.add_reaction(event.channel_id, posted.message_id, reaction_name)
                    )

        record = ConversationRecord(
            user_id=event.user_id,
            channel_id=event.channel_id,
            user_message=event.text,
            bot_response=response_text,
            matched_faq_id=result.faq.id if result.matched else None,
            response_type=RESPONSE_TYPE_FAQ_MATCH if result.matched else RESPONSE_TYPE_NO_MATCH,
            response_time_ms=response_time_ms,
        )
        await persist(self.store.append_conversation, record)
        return record

    def _reply(self, event: MessageEvent, text: str):
        if event.thread_id:
            return self.messenger.post_threaded_message(event.channel_id, event.thread_id, text)
        return self.messenger.post_message(event.channel_id, text)

    async def handle_reaction(
        self, event: ReactionEvent, bot_user_id: Optional[str]
    ) -> Optional[FeedbackRecord]:
        """
        Record a thumbs up/down on one of the bot's answers. A thumbs down
        also asks the user, in a thread, what they were looking for.
        """
        sentiment = classify(event.reaction_name, event.user_id, bot_user_id)
        if sentiment is Sentiment.IGNORED:
            return None

        if event.target_author_id and bot_user_id and event.target_author_id != bot_user_id:
            logger.debug("Ignoring reaction on a message not sent by the bot")
            return None

        record = FeedbackRecord(
            user_id=event.user_id,
            channel_id=event.channel_id,
            satisfaction=sentiment is Sentiment.POSITIVE,
            feedback_text=base_reaction_name(event.reaction_name),
        )
        logger.info("User %s reacted %s to a bot answer", event.user_id, sentiment.value)
        await persist(self.store.append_feedback, record)

        if sentiment is Sentiment.NEGATIVE:
            await self.tracker.arm(event.user_id, event.channel_id, self._thread_for(event))
        return record

    def _thread_for(self, event: ReactionEvent) -> str:
        """Thread root for the follow-up: the answer's own thread if it was posted in one."""
        root = self.thread_roots.get(answer_key(event.channel_id, event.target_message_ts))
        return root or event.target_message_ts
