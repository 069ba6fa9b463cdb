# agent/agent_graph.py

import logging
from typing import Optional

from langgraph.graph import StateGraph, END
from langgraph.pregel import Pregel
from langchain_core.runnables import RunnableLambda
from langchain_core.language_models.chat_models import BaseChatModel

from agent.plan_updater import update_app_plan
from agent.reply import append_plan_update_notice, generate_fallback_reply, generate_reply
from agent.state import PlanOutcome, PlannerState, ReplyOutcome

logger = logging.getLogger(__name__)


# --- Nodes ---
#
# PlanOutcome:  PENDING -> UPDATED | FALLBACK
# ReplyOutcome: PENDING -> REPLIED | RETRYING -> REPLIED | FAILED

async def plan_updater_step(state: PlannerState, llm: Optional[BaseChatModel] = None) -> dict:
    """Regenerates the plan. Never fails: upstream errors yield the fallback plan."""
    result = await update_app_plan(state.message, state.history, state.current_plan, llm=llm)
    outcome = PlanOutcome.FALLBACK if result.used_fallback else PlanOutcome.UPDATED
    logger.info(f"Plan step finished with outcome '{outcome.value}'")
    return {"updated_plan": result.plan, "plan_outcome": outcome}


async def reply_generator_step(state: PlannerState, llm: Optional[BaseChatModel] = None) -> dict:
    """Primary reply attempt. A failure hands over to the simplified retry."""
    try:
        reply = await generate_reply(state.message, state.history, state.plan_for_reply, llm=llm)
    except Exception as e:
        logger.error(f"Error generating reply, retrying with simplified prompt: {e}", exc_info=True)
        return {"reply_outcome": ReplyOutcome.RETRYING, "error": str(e)}

    return {
        "reply": append_plan_update_notice(reply, bool(state.updated_plan)),
        "reply_outcome": ReplyOutcome.REPLIED,
    }


async def reply_fallback_step(state: PlannerState, llm: Optional[BaseChatModel] = None) -> dict:
    """Second and last reply attempt."""
    try:
        reply = await generate_fallback_reply(state.message, state.history, state.plan_for_reply, llm=llm)
    except Exception as e:
        logger.error(f"Fallback reply failed, giving up on this turn: {e}", exc_info=True)
        return {"reply_outcome": ReplyOutcome.FAILED, "error": str(e)}

    return {
        "reply": append_plan_update_notice(reply, bool(state.updated_plan)),
        "reply_outcome": ReplyOutcome.REPLIED,
        "error": None,
    }


# --- Control Flow and Graph Definition ---

def after_reply_router(state: PlannerState) -> str:
    """Routes to the simplified retry only when the primary reply failed."""
    if state.reply_outcome == ReplyOutcome.RETRYING:
        return "reply_fallback"
    return END


def build_state_graph(llm: Optional[BaseChatModel] = None) -> StateGraph:
    """Builds the turn graph without compiling it. `llm` defaults to get_llm_client()."""
    workflow = StateGraph(PlannerState)

    async def plan_updater(state: PlannerState) -> dict:
        return await plan_updater_step(state, llm=llm)

    async def reply_generator(state: PlannerState) -> dict:
        return await reply_generator_step(state, llm=llm)

    async def reply_fallback(state: PlannerState) -> dict:
        return await reply_fallback_step(state, llm=llm)

    # Add nodes
    workflow.add_node("plan_updater", RunnableLambda(plan_updater))
    workflow.add_node("reply_generator", RunnableLambda(reply_generator))
    workflow.add_node("reply_fallback", RunnableLambda(reply_fallback))

    # Define edges
    workflow.set_entry_point("plan_updater")
    workflow.add_edge("plan_updater", "reply_generator")
    workflow.add_conditional_edges(
        "reply_generator",
        after_reply_router,
        {
            "reply_fallback": "reply_fallback",
            END: END,
        },
    )
    workflow.add_edge("reply_fallback", END)
    return workflow


def compile_agent_graph(llm: Optional[BaseChatModel] = None) -> Pregel:
    """Return a compiled graph. Turns are stateless, so there is no checkpointer."""
    return build_state_graph(llm).compile()
