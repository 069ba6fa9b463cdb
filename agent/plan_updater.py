# agent/plan_updater.py

import logging
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, Field
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from agent.formatting import clean_response_formatting
from agent.prompts.plan_update_prompt import (
    FALLBACK_PLAN,
    PLAN_UPDATE_TRIGGER,
    get_plan_update_prompt,
    is_fresh_plan,
)
from common.llm import get_llm_client

logger = logging.getLogger(__name__)


class PlanUpdateResult(BaseModel):
    """Output of the plan update step."""
    plan: str = Field(..., description="The normalized plan document.")
    mode: Literal["fresh", "merge"]
    used_fallback: bool = Field(default=False, description="True when the LLM call failed.")


def build_plan_update_messages(
    message: str, history: Sequence[BaseMessage], current_plan: str
) -> list[BaseMessage]:
    """The history is summarized into the system prompt, not replayed as turns."""
    return [
        SystemMessage(content=get_plan_update_prompt(message, history, current_plan)),
        HumanMessage(content=PLAN_UPDATE_TRIGGER),
    ]


async def update_app_plan(
    message: str,
    history: Sequence[BaseMessage],
    current_plan: str,
    llm: Optional[BaseChatModel] = None,
) -> PlanUpdateResult:
    """
    Regenerates the app plan from the conversation.

    Never raises on upstream failure: a generic fallback plan is returned
    instead so the turn can still produce a reply.
    """
    mode = "fresh" if is_fresh_plan(current_plan) else "merge"
    logger.info(f"Updating app plan in '{mode}' mode (current plan length: {len(current_plan)})")

    if llm is None:
        llm = get_llm_client(purpose="plan_updater")

    try:
        response = await llm.ainvoke(build_plan_update_messages(message, history, current_plan))
        plan = clean_response_formatting(str(response.content))
    except Exception as e:
        logger.error(f"Error updating app plan with LLM, using fallback plan: {e}", exc_info=True)
        return PlanUpdateResult(
            plan=clean_response_formatting(FALLBACK_PLAN),
            mode=mode,
            used_fallback=True,
        )

    logger.info(f"App plan updated ({len(plan)} chars)")
    return PlanUpdateResult(plan=plan, mode=mode)
