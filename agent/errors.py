# agent/errors.py

class PlannerError(Exception):
    """Base class for errors raised while processing a chat turn."""


class InvalidInputError(PlannerError):
    """The chat request cannot be processed, e.g. the message is missing."""


class ReplyGenerationError(PlannerError):
    """Both the primary and the simplified reply attempts failed."""
