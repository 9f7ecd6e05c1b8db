"""
Outbound Slack messaging. Calls are not retried.
"""
import asyncio

import aiohttp
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from faqbot.exceptions import DispatchFailure
from faqbot.logger import logger
from faqbot.models import PostResult

_SEND_ERRORS = (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError)


def _describe(error: Exception) -> str:
    if isinstance(error, SlackApiError):
        return str(error.response.get("error", error))
    return str(error) or type(error).__name__


class SlackMessenger:
    def __init__(self, client: AsyncWebClient):
        self.client = client

    async def post_message(self, channel_id: str, text: str) -> PostResult:
        try:
            response = await self.client.chat_postMessage(channel=channel_id, text=text)
        except _SEND_ERRORS as e:
            raise DispatchFailure(f"chat.postMessage to {channel_id} failed: {_describe(e)}") from e
        logger.debug("Message sent successfully to %s", channel_id)
        return PostResult(ok=bool(response.get("ok")), message_id=response.get("ts"))

    async def post_threaded_message(self, channel_id: str, thread_id: str, text: str) -> PostResult:
        try:
            response = await self.client.chat_postMessage(
                channel=channel_id, thread_ts=thread_id, text=text
            )
        except _SEND_ERRORS as e:
            raise DispatchFailure(
                f"chat.postMessage to {channel_id} thread {thread_id} failed: {_describe(e)}"
            ) from e
        logger.debug("Threaded message sent successfully to %s/%s", channel_id, thread_id)
        return PostResult(ok=bool(response.get("ok")), message_id=response.get("ts"))

    async def add_reaction(self, channel_id: str, message_id: str, reaction_name: str) -> None:
        try:
            await self.client.reactions_add(
                channel=channel_id, timestamp=message_id, name=reaction_name
            )
        except _SEND_ERRORS as e:
            raise DispatchFailure(
                f"reactions.add :{reaction_name}: on {channel_id}/{message_id} failed: {_describe(e)}"
            ) from e
