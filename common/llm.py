# common/llm.py

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

from common.config import get_settings

def get_llm_client(purpose: str = "planner") -> BaseChatModel:
    """
    Factory function to get the LLM client.

    Both steps of a turn currently share one model configuration. The
    'purpose' argument lets the plan updater and the reply generator be
    pointed at different models later without touching their call sites.

    Args:
        purpose: The intended use of the LLM ('plan_updater' or 'planner').

    Returns:
        An instance of a LangChain chat model client.
    """
    settings = get_settings()

    # ChatOpenAI would fall back to OPENAI_API_KEY from the environment, but
    # passing it from settings makes sure the .env file is respected.
    kwargs = {
        "api_key": settings.OPENAI_API_KEY,
        "model": settings.OPENAI_MODEL_NAME,
        "temperature": settings.OPENAI_TEMPERATURE,
        "max_tokens": settings.OPENAI_MAX_TOKENS,
    }
    if settings.OPENAI_TIMEOUT is not None:
        kwargs["timeout"] = settings.OPENAI_TIMEOUT

    return ChatOpenAI(**kwargs)
