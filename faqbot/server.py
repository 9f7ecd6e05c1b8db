from datetime import datetime, timezone
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slack_bolt.async_app import AsyncApp
from slack_bolt.adapter.fastapi.async_handler import AsyncSlackRequestHandler
from starlette.concurrency import run_in_threadpool

from faqbot.config import get_add_feedback_reactions, get_followup_ttl_seconds
from faqbot.events import parse_event
from faqbot.exceptions import StoreReadFailure
from faqbot.feedback_state import FeedbackStateTracker
from faqbot.logger import logger
from faqbot.messenger import SlackMessenger
from faqbot.orchestrator import ConversationOrchestrator
from faqbot.session_store import InMemorySessionStore


def make_event_listener(orchestrator: ConversationOrchestrator):
    """Bolt listener that hands a raw Slack event to the orchestrator."""

    async def handle_event(event, context):
        await orchestrator.handle(parse_event(event), context.bot_user_id)

    return handle_event


def create_orchestrator(store, messenger) -> ConversationOrchestrator:
    tracker = FeedbackStateTracker(
        sessions=InMemorySessionStore(),
        store=store,
        messenger=messenger,
        ttl_seconds=get_followup_ttl_seconds(),
    )
    return ConversationOrchestrator(
        store=store,
        messenger=messenger,
        tracker=tracker,
        add_feedback_reactions=get_add_feedback_reactions(),
    )


def create_app(store, slack_app: AsyncApp | None = None) -> FastAPI:
    """
    Wire the Slack app, the orchestrator and the HTTP routes around a FaqStore.
    """
    if slack_app is None:
        slack_app = AsyncApp(
            token=os.environ["SLACK_BOT_TOKEN"],
            signing_secret=os.environ["SLACK_SIGNING_SECRET"],
            # Ack right away; listeners keep running after Slack got its response
            process_before_response=False,
        )

    orchestrator = create_orchestrator(store, SlackMessenger(slack_app.client))
    listener = make_event_listener(orchestrator)
    slack_app.event("message")(listener)
    slack_app.event("reaction_added")(listener)

    handler = AsyncSlackRequestHandler(slack_app)
    api = FastAPI()
    api.state.orchestrator = orchestrator

    @api.post("/slack/events")
    async def slack_events(request: Request):
        # URL verification challenges are answered by Bolt
        return await handler.handle(request)

    @api.get("/")
    async def ping():
        return JSONResponse({"status": "ok", "message": "HR FAQ Slack bot"})

    @api.get("/health")
    async def health():
        return JSONResponse({
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": os.getenv("ENV", "dev"),
        })

    @api.get("/slack/test-connection")
    async def test_connection():
        try:
            await run_in_threadpool(store.ping)
        except StoreReadFailure as e:
            logger.error("Database connection check failed: %s", e)
            return JSONResponse({"connected": False, "error": str(e)}, status_code=500)

        return JSONResponse({
            "connected": True,
            "message": "Successfully connected to MongoDB",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    return api
