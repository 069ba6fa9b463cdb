# agent/reply.py

import logging
from typing import Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from agent.prompts.planner_system_prompt import (
    get_reply_system_prompt,
    get_simplified_reply_system_prompt,
)
from common.llm import get_llm_client

logger = logging.getLogger(__name__)

PLAN_UPDATED_NOTICE = "\n\n*I've updated your app plan canvas with the latest information from our conversation.*"


def build_reply_messages(
    system_prompt: str, history: Sequence[BaseMessage], message: str
) -> list[BaseMessage]:
    return [SystemMessage(content=system_prompt), *history, HumanMessage(content=message)]


async def generate_reply(
    message: str,
    history: Sequence[BaseMessage],
    plan: str,
    llm: Optional[BaseChatModel] = None,
) -> str:
    """Asks the LLM for the user-facing reply, grounded in the current plan."""
    if llm is None:
        llm = get_llm_client()
    messages = build_reply_messages(get_reply_system_prompt(plan), history, message)
    logger.info(f"Generating reply over {len(messages)} messages")
    response = await llm.ainvoke(messages)
    return str(response.content)


async def generate_fallback_reply(
    message: str,
    history: Sequence[BaseMessage],
    plan: str,
    llm: Optional[BaseChatModel] = None,
) -> str:
    """Same as generate_reply, but with the simplified plan instructions."""
    if llm is None:
        llm = get_llm_client()
    messages = build_reply_messages(get_simplified_reply_system_prompt(plan), history, message)
    logger.info(f"Generating fallback reply over {len(messages)} messages")
    response = await llm.ainvoke(messages)
    return str(response.content)


def append_plan_update_notice(reply: str, plan_updated: bool) -> str:
    """Tells the user the canvas changed, unless the reply already says so."""
    if plan_updated and "updated" not in reply:
        return reply + PLAN_UPDATED_NOTICE
    return reply
