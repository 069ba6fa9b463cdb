# tests/conftest.py

import sys
from pathlib import Path

# Add the project root directory to the system path to ensure
# modules like 'common' and 'agent' can be imported in tests.
# The project root is one level up from this directory (tests/conftest.py).
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import AsyncMock, MagicMock
from langchain_core.messages import AIMessage

from agent.prompts.plan_update_prompt import SECTION_HEADERS


# --- Helper Functions ---

def _make_plan(*features: str) -> str:
    """Builds a minimal six-section plan whose Key Features lists `features`."""
    sections = []
    for header in SECTION_HEADERS:
        items = features if header == SECTION_HEADERS[0] else ("Placeholder item",)
        bullets = "\n".join(f"- **{item}**" for item in items)
        sections.append(f"{header}\n\n{bullets}")
    return "\n\n".join(sections)


def _make_llm(*responses) -> MagicMock:
    """
    Returns a chat model double whose ainvoke yields `responses` in order.

    A response that is an Exception instance is raised instead of returned;
    strings are wrapped in AIMessage.
    """
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=[
        r if isinstance(r, Exception) else AIMessage(content=r) for r in responses
    ])
    return llm


# --- Fixtures ---

@pytest.fixture
def make_llm():
    """Factory fixture: make_llm("plan", "reply") or make_llm(Exception("boom"), ...)."""
    return _make_llm


@pytest.fixture
def make_plan():
    return _make_plan


@pytest.fixture
def todo_plan() -> str:
    return _make_plan("Task List", "Due Dates")
