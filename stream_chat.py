# stream_chat.py
import argparse
import logging
import sys

import openai

from assistant_runner import create_runtime
from assistant_runner.errors import AssistantRunnerError
from assistant_runner.services.openai_service import stream_chat_completion


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Stream one chat completion.")
    parser.add_argument("prompt", nargs="?", default="Say this is a test")
    parser.add_argument("--model")
    args = parser.parse_args(argv)

    try:
        settings, provider = create_runtime()
        client = provider.provide()
        for text in stream_chat_completion(
            client, args.prompt, model=args.model or settings.model
        ):
            print(text, end="", flush=True)
        print()
    except AssistantRunnerError as e:
        logging.error("[Stream] %s", e)
        return 1
    except openai.OpenAIError as e:
        logging.exception("[Stream] Chat completion failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
