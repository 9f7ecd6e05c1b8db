"""
Convert raw Slack event payloads into the event types the bot understands.
"""
from faqbot.models import InboundEvent, MessageEvent, ReactionEvent, UnknownEvent
from faqbot.utils import strip_leading_mention

# Message subtypes that still carry a user's own text
USER_MESSAGE_SUBTYPES = {None, "thread_broadcast", "file_share"}


def parse_message(event: dict) -> InboundEvent:
    subtype = event.get("subtype")
    if subtype not in USER_MESSAGE_SUBTYPES:
        return UnknownEvent(event_type=f"message:{subtype}")

    ts = event.get("ts")
    thread_ts = event.get("thread_ts")
    return MessageEvent(
        text=strip_leading_mention(event.get("text", "") or ""),
        user_id=event.get("user") or "",
        channel_id=event.get("channel") or "",
        # A thread root carries thread_ts == ts; only replies are threaded
        thread_id=thread_ts if thread_ts and thread_ts != ts else None,
        is_from_bot=bool(event.get("bot_id")) or subtype == "bot_message",
        message_id=ts,
    )


def parse_reaction(event: dict) -> InboundEvent:
    item = event.get("item") or {}
    if item.get("type") != "message":
        return UnknownEvent(event_type=f"reaction_added:{item.get('type')}")

    return ReactionEvent(
        reaction_name=event.get("reaction") or "",
        user_id=event.get("user") or "",
        target_message_ts=item.get("ts") or "",
        channel_id=item.get("channel") or "",
        target_author_id=event.get("item_user"),
    )


def parse_event(event: dict) -> InboundEvent:
    event_type = event.get("type")
    if event_type == "message":
        return parse_message(event)
    if event_type == "reaction_added":
        return parse_reaction(event)
    return UnknownEvent(event_type=str(event_type))
