from config.config import Config, ModelType
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


def create_llm_client(config: Config) -> BaseAIClient:
    """
    Initialize the AI client selected by ``config.MODEL_TYPE``.

    Raises:
        ValueError: If the model type is unsupported or its API key is missing
    """
    model_type = config.MODEL_TYPE

    if model_type == ModelType.GEMINI.value:
        from api.google_gemini_client import GeminiClient

        if not config.GOOGLE_GEMINI_API_KEY:
            raise ValueError("GOOGLE_GEMINI_API_KEY not found in environment variables")
        client = GeminiClient(
            api_key=config.GOOGLE_GEMINI_API_KEY,
            model_name=config.DEFAULT_GEMINI_MODEL,
            temperature=config.LLM_TEMPERATURE,
        )

    elif model_type == ModelType.OPENAI.value:
        from api.openai_client import OpenAIClient

        if not config.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY not found in environment variables")
        client = OpenAIClient(
            api_key=config.OPENAI_API_KEY,
            model_name=config.DEFAULT_OPENAI_MODEL,
            temperature=config.LLM_TEMPERATURE,
        )

    else:
        raise ValueError(f"Unsupported MODEL_TYPE: {model_type}. Must be 'gemini' or 'openai'")

    logger.info(f"Initialized {config.get_model_info()} client")
    return client
