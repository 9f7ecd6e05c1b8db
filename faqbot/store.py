"""
Persistence for FAQs, conversation logs and feedback.

The store is synchronous (pymongo); async callers offload it with
starlette's run_in_threadpool.
"""
from datetime import datetime, timezone
from typing import Protocol

from pymongo.database import Database
from pymongo.errors import PyMongoError

from faqbot.constants import (
    CONVERSATIONS_COLLECTION,
    FAQS_COLLECTION,
    FEEDBACK_COLLECTION,
)
from faqbot.exceptions import StoreReadFailure, StoreWriteFailure
from faqbot.logger import logger
from faqbot.models import ConversationRecord, FaqEntry, FeedbackRecord
from faqbot.utils import sanitize_slack_id


class FaqStore(Protocol):
    def list_active_faqs(self) -> list[FaqEntry]: ...

    def append_conversation(self, record: ConversationRecord) -> None: ...

    def append_feedback(self, record: FeedbackRecord) -> None: ...

    def ping(self) -> None: ...


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def faq_from_document(doc: dict) -> FaqEntry:
    faq_id = doc.get("id", doc.get("_id"))
    return FaqEntry(
        id=str(faq_id),
        question=doc.get("question") or "",
        answer=doc.get("answer") or "",
        category=doc.get("category"),
        is_active=bool(doc.get("is_active", False)),
    )


def conversation_to_document(record: ConversationRecord) -> dict:
    return {
        "slack_user_id": sanitize_slack_id(record.user_id, "user_id"),
        "slack_channel_id": sanitize_slack_id(record.channel_id, "channel_id"),
        "user_message": record.user_message,
        "bot_response": record.bot_response,
        "faq_matched": record.matched_faq_id,
        "response_type": record.response_type,
        "response_time_ms": record.response_time_ms,
        "created_at": _utc_now_iso(),
    }


def feedback_to_document(record: FeedbackRecord) -> dict:
    return {
        "slack_user_id": sanitize_slack_id(record.user_id, "user_id"),
        "slack_channel_id": sanitize_slack_id(record.channel_id, "channel_id"),
        "satisfaction": record.satisfaction,
        "feedback_text": record.feedback_text,
        "created_at": _utc_now_iso(),
    }


class MongoFaqStore:
    def __init__(self, db: Database):
        self.db = db
        self.faqs = db[FAQS_COLLECTION]
        self.conversations = db[CONVERSATIONS_COLLECTION]
        self.feedback = db[FEEDBACK_COLLECTION]

    def list_active_faqs(self) -> list[FaqEntry]:
        """
        Return a snapshot of active FAQs in insertion order.
        Entries missing a question are skipped.
        """
        try:
            docs = list(self.faqs.find({"is_active": True}).sort("_id", 1))
        except PyMongoError as e:
            raise StoreReadFailure(f"Could not fetch active FAQs: {e}") from e

        entries = []
        for doc in docs:
            if not doc.get("question"):
                logger.warning("Skipping FAQ without a question: %s", doc.get("_id"))
                continue
            entries.append(faq_from_document(doc))
        logger.debug(f"Found {len(entries)} active FAQs")
        return entries

    def append_conversation(self, record: ConversationRecord) -> None:
        try:
            self.conversations.insert_one(conversation_to_document(record))
        except (PyMongoError, ValueError) as e:
            raise StoreWriteFailure(f"Could not store conversation: {e}") from e

    def append_feedback(self, record: FeedbackRecord) -> None:
        try:
            self.feedback.insert_one(feedback_to_document(record))
        except (PyMongoError, ValueError) as e:
            raise StoreWriteFailure(f"Could not store feedback: {e}") from e

    def ping(self) -> None:
        try:
            self.db.command("ping")
        except PyMongoError as e:
            raise StoreReadFailure(f"Database ping failed: {e}") from e
