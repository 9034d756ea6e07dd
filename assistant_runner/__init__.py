from assistant_runner.config import load_settings, configure_logging
from assistant_runner.services.openai_service import OpenAIClientProvider


def create_runtime(dotenv: bool = True):
    """Load settings, set up logging and return (settings, client provider)."""
    settings = load_settings(dotenv=dotenv)
    configure_logging(settings.log_level)

    provider = OpenAIClientProvider(
        api_key=settings.api_key, max_retries=settings.max_retries
    )
    return settings, provider
