"""
Pytest fixtures for the FAQ bot.

Provides in-memory stand-ins for the MongoDB store and the Slack messenger
so the matcher, the feedback flow and the orchestrator can be exercised
without network access.
"""
import pytest

from faqbot.exceptions import DispatchFailure, StoreReadFailure, StoreWriteFailure
from faqbot.feedback_state import FeedbackStateTracker
from faqbot.models import FaqEntry, PostResult
from faqbot.orchestrator import ConversationOrchestrator
from faqbot.session_store import InMemorySessionStore


class FakeStore:
    def __init__(self, faqs=None):
        self.faqs = list(faqs or [])
        self.conversations = []
        self.feedback = []
        self.list_calls = 0
        self.fail_reads = False
        self.fail_writes = False

    def list_active_faqs(self):
        self.list_calls += 1
        if self.fail_reads:
            raise StoreReadFailure("database unavailable")
        return [faq for faq in self.faqs if faq.is_active]

    def append_conversation(self, record):
        if self.fail_writes:
            raise StoreWriteFailure("insert failed")
        self.conversations.append(record)

    def append_feedback(self, record):
        if self.fail_writes:
            raise StoreWriteFailure("insert failed")
        self.feedback.append(record)

    def ping(self):
        if self.fail_reads:
            raise StoreReadFailure("ping failed")


class FakeMessenger:
    def __init__(self):
        self.messages = []
        self.threaded = []
        self.reactions = []
        self.fail_posts = False
        self.fail_reactions = False
        self._counter = 0

    def _next_ts(self):
        self._counter += 1
        return f"1700000000.{self._counter:06d}"

    async def post_message(self, channel_id, text):
        if self.fail_posts:
            raise DispatchFailure("channel_not_found")
        ts = self._next_ts()
        self.messages.append((channel_id, text, ts))
        return PostResult(ok=True, message_id=ts)

    async def post_threaded_message(self, channel_id, thread_id, text):
        if self.fail_posts:
            raise DispatchFailure("channel_not_found")
        ts = self._next_ts()
        self.threaded.append((channel_id, thread_id, text, ts))
        return PostResult(ok=True, message_id=ts)

    async def add_reaction(self, channel_id, message_id, reaction_name):
        if self.fail_reactions:
            raise DispatchFailure("already_reacted")
        self.reactions.append((channel_id, message_id, reaction_name))


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sample_faqs():
    return [
        FaqEntry(id="1", question="How do I reset my password?", answer="Use the self-service portal."),
        FaqEntry(id="2", question="How do I request a new monitor?", answer="File an IT equipment ticket."),
        FaqEntry(id="3", question="How do I request VPN access?", answer="Ask your manager to approve VPN access."),
        FaqEntry(id="4", question="How do I set up Zoom?", answer="Install Zoom from the software center.", is_active=False),
    ]


@pytest.fixture
def store(sample_faqs):
    return FakeStore(sample_faqs)


@pytest.fixture
def messenger():
    return FakeMessenger()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sessions():
    return InMemorySessionStore()


@pytest.fixture
def tracker(sessions, store, messenger, clock):
    return FeedbackStateTracker(sessions=sessions, store=store, messenger=messenger, clock=clock)


@pytest.fixture
def orchestrator(store, messenger, tracker):
    return ConversationOrchestrator(store=store, messenger=messenger, tracker=tracker)
