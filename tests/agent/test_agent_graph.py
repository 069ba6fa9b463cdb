import pytest
from unittest.mock import patch, AsyncMock

from langchain_core.messages import HumanMessage

from agent.agent_graph import after_reply_router, build_state_graph, compile_agent_graph
from agent.formatting import clean_response_formatting
from agent.prompts.plan_update_prompt import FALLBACK_PLAN
from agent.reply import PLAN_UPDATED_NOTICE
from agent.state import PlannerState, PlanOutcome, ReplyOutcome


def test_router_only_retries_after_primary_failure():
    state = PlannerState(message="hi", reply_outcome=ReplyOutcome.RETRYING)
    assert after_reply_router(state) == "reply_fallback"

    state = PlannerState(message="hi", reply_outcome=ReplyOutcome.REPLIED)
    assert after_reply_router(state) != "reply_fallback"


def test_compiled_graph_keeps_no_checkpointer(make_llm):
    graph = compile_agent_graph(make_llm())
    assert graph.checkpointer is None


def test_plan_for_reply_prefers_updated_plan():
    assert PlannerState(message="hi", current_plan="old").plan_for_reply == "old"
    assert PlannerState(message="hi", current_plan="old", updated_plan="new").plan_for_reply == "new"
    # An empty update leaves the client's plan in place.
    assert PlannerState(message="hi", current_plan="old", updated_plan="").plan_for_reply == "old"


@pytest.mark.asyncio
async def test_happy_path_updates_plan_then_replies(make_llm, todo_plan):
    llm = make_llm(todo_plan, "Love it. What about sharing?")
    graph = compile_agent_graph(llm)

    final_state = await graph.ainvoke(PlannerState(message="I want a todo app"))

    assert final_state["plan_outcome"] == PlanOutcome.UPDATED
    assert final_state["reply_outcome"] == ReplyOutcome.REPLIED
    assert final_state["updated_plan"] == todo_plan
    assert final_state["reply"] == "Love it. What about sharing?" + PLAN_UPDATED_NOTICE

    # The reply call sees the plan produced by the first call.
    reply_messages = llm.ainvoke.call_args_list[1].args[0]
    assert todo_plan in reply_messages[0].content
    assert reply_messages[-1] == HumanMessage(content="I want a todo app")


@pytest.mark.asyncio
async def test_plan_failure_uses_fallback_and_still_replies(make_llm):
    llm = make_llm(ConnectionError("down"), "Here is a starting point.")
    graph = compile_agent_graph(llm)

    final_state = await graph.ainvoke(PlannerState(message="I want a todo app"))

    assert final_state["plan_outcome"] == PlanOutcome.FALLBACK
    assert final_state["updated_plan"] == clean_response_formatting(FALLBACK_PLAN)
    assert final_state["reply_outcome"] == ReplyOutcome.REPLIED
    assert llm.ainvoke.await_count == 2


@pytest.mark.asyncio
async def test_reply_failure_retries_with_simplified_prompt(make_llm, todo_plan):
    llm = make_llm(todo_plan, RuntimeError("first reply failed"), "Second try worked.")
    graph = compile_agent_graph(llm)

    final_state = await graph.ainvoke(PlannerState(message="Add reminders", current_plan=todo_plan))

    assert final_state["reply_outcome"] == ReplyOutcome.REPLIED
    assert final_state["reply"] == "Second try worked." + PLAN_UPDATED_NOTICE
    assert final_state.get("error") is None
    retry_prompt = llm.ainvoke.call_args_list[2].args[0][0].content
    assert retry_prompt.rstrip().endswith("features that are already defined.")


@pytest.mark.asyncio
async def test_both_reply_attempts_failing_ends_in_failed(make_llm, todo_plan):
    llm = make_llm(todo_plan, RuntimeError("first"), RuntimeError("second"))
    graph = compile_agent_graph(llm)

    final_state = await graph.ainvoke(PlannerState(message="Add reminders"))

    assert final_state["reply_outcome"] == ReplyOutcome.FAILED
    assert final_state["error"] == "second"
    assert final_state.get("reply") is None
    assert llm.ainvoke.await_count == 3


@pytest.mark.asyncio
@patch("agent.agent_graph.reply_fallback_step", new_callable=AsyncMock)
@patch("agent.agent_graph.reply_generator_step", new_callable=AsyncMock)
@patch("agent.agent_graph.plan_updater_step", new_callable=AsyncMock)
async def test_nodes_run_in_fixed_order(mock_plan_step, mock_reply_step, mock_fallback_step):
    calls = []
    mock_plan_step.side_effect = lambda state, llm=None: calls.append("plan") or {
        "updated_plan": "plan", "plan_outcome": PlanOutcome.UPDATED,
    }
    mock_reply_step.side_effect = lambda state, llm=None: calls.append("reply") or {
        "reply": "ok", "reply_outcome": ReplyOutcome.REPLIED,
    }

    graph = build_state_graph().compile()
    await graph.ainvoke(PlannerState(message="hi"))

    assert calls == ["plan", "reply"]
    mock_fallback_step.assert_not_awaited()
