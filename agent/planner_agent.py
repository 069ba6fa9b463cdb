# agent/planner_agent.py

import logging
from typing import Any, List, Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from agent.agent_graph import compile_agent_graph
from agent.errors import InvalidInputError, ReplyGenerationError
from agent.state import PlannerState, ReplyOutcome
from common.api_messages import ChatMessage, ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


def to_langchain_messages(history: Sequence[ChatMessage]) -> List[BaseMessage]:
    """Converts the client's role-tagged history into LangChain messages."""
    messages: List[BaseMessage] = []
    for msg in history:
        if msg.role == "user":
            messages.append(HumanMessage(content=msg.content))
        elif msg.role == "assistant":
            messages.append(AIMessage(content=msg.content))
        else:
            messages.append(SystemMessage(content=msg.content))
    return messages


def resolve_current_plan(current_app_plan: Any) -> str:
    """The client's plan wins; anything that is not a string resets it."""
    if isinstance(current_app_plan, str):
        return current_app_plan
    return ""


async def process_chat(request: ChatRequest, llm: Optional[BaseChatModel] = None) -> ChatResponse:
    """
    Runs one chat turn: update the plan, then reply using the updated plan.

    Raises:
        InvalidInputError: the message is missing or empty.
        ReplyGenerationError: both reply attempts failed.
    """
    message = request.message
    if not isinstance(message, str) or not message:
        raise InvalidInputError("Message is required")

    history = to_langchain_messages(request.conversation_history)
    logger.info(f"Processing message: '{message}'")
    logger.info(f"Conversation history length: {len(history)}")

    initial_state = PlannerState(
        message=message,
        history=history,
        current_plan=resolve_current_plan(request.current_app_plan),
    )

    agent_graph = compile_agent_graph(llm)
    final_state = await agent_graph.ainvoke(initial_state)

    if final_state["reply_outcome"] != ReplyOutcome.REPLIED:
        raise ReplyGenerationError(final_state.get("error") or "Reply generation failed")

    updated_plan = final_state.get("updated_plan")
    logger.info(f"Turn finished (plan outcome: {final_state['plan_outcome'].value})")
    return ChatResponse(
        response=final_state["reply"],
        app_plan=updated_plan or None,
    )
