# run_assistant.py

import argparse
import dataclasses
import logging
import sys

import openai

from assistant_runner import create_runtime
from assistant_runner.errors import AssistantRunnerError, ConfigurationError
from assistant_runner.handlers.conversation import (
    cleanup,
    open_conversation,
    run_conversation,
)
from assistant_runner.services.openai_service import list_assistants

DEFAULT_MESSAGE = (
    "Write a short poem about the sea and save it to a file called sea.txt."
)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Post a message to an OpenAI assistant thread and wait for the run."
    )
    parser.add_argument("--message", default=DEFAULT_MESSAGE)
    parser.add_argument("--assistant-id", help="reuse this assistant (default: create one)")
    parser.add_argument("--thread-id", help="reuse this thread (default: create one)")
    parser.add_argument("--model")
    parser.add_argument("--poll-interval", type=float, help="seconds between polls")
    parser.add_argument("--max-wait", type=float, help="give up after this many seconds")
    parser.add_argument("--output-dir", help="where the writeFile tool puts files")
    parser.add_argument(
        "--cleanup",
        action="store_true",
        help="delete the assistant/thread this invocation created",
    )
    parser.add_argument(
        "--list-assistants", action="store_true", help="list assistants and exit"
    )
    return parser


def apply_overrides(settings, args):
    for flag, value in (("--poll-interval", args.poll_interval), ("--max-wait", args.max_wait)):
        if value is not None and not value >= 0:
            raise ConfigurationError(f"{flag} must be a non-negative number, got {value}")

    overrides = {
        "assistant_id": args.assistant_id,
        "thread_id": args.thread_id,
        "model": args.model,
        "poll_interval": args.poll_interval,
        "max_wait": args.max_wait,
        "output_dir": args.output_dir,
    }
    return dataclasses.replace(
        settings, **{k: v for k, v in overrides.items() if v is not None}
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings, provider = create_runtime()
        settings = apply_overrides(settings, args)
        client = provider.provide()

        if args.list_assistants:
            for assistant in list_assistants(client):
                print(f"{assistant.id}  {assistant.name}  {assistant.model}")
            return 0

        conversation = open_conversation(client, settings)
        try:
            outcome = run_conversation(
                client, settings, args.message, conversation=conversation
            )
        finally:
            if args.cleanup:
                cleanup(client, conversation)

    except AssistantRunnerError as e:
        logging.error("[Main] %s", e)
        return 1
    except openai.OpenAIError as e:
        logging.exception("[Main] OpenAI request failed: %s", e)
        return 1

    logging.info(
        "[Main] Done: %d poll(s), %d tool submission(s)",
        outcome.polls,
        outcome.submissions,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
