# agent/state.py

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from langchain_core.messages import BaseMessage


class PlanOutcome(str, Enum):
    PENDING = "pending"
    UPDATED = "updated"
    FALLBACK = "fallback"


class ReplyOutcome(str, Enum):
    PENDING = "pending"
    # The primary reply failed; the simplified prompt has not been tried yet.
    RETRYING = "retrying"
    REPLIED = "replied"
    FAILED = "failed"


class PlannerState(BaseModel):
    """
    Represents the state of a single chat turn as it moves through the graph.

    Nothing here outlives the turn; the plan always arrives with the request.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    # The latest user message
    message: str = Field(..., description="The message that triggered this turn.")

    # Prior turns, oldest first, excluding the current message
    history: List[BaseMessage] = Field(default_factory=list, description="Prior conversation turns.")

    # The plan as supplied by the client ("" when there is none)
    current_plan: str = Field(default="", description="The client-supplied plan.")

    updated_plan: Optional[str] = Field(default=None, description="The plan produced by the plan updater.")
    plan_outcome: PlanOutcome = PlanOutcome.PENDING

    reply: Optional[str] = Field(default=None, description="The user-facing reply.")
    reply_outcome: ReplyOutcome = ReplyOutcome.PENDING

    # Text of the last upstream error, kept for logging and the final failure
    error: Optional[str] = None

    @property
    def plan_for_reply(self) -> str:
        """The newest plan available to the reply step."""
        return self.updated_plan or self.current_plan
