import logging
from dataclasses import dataclass, field

from assistant_runner.services.openai_service import (
    add_message,
    create_assistant,
    create_run,
    create_thread,
    delete_assistant,
    delete_thread,
    retrieve_thread,
)
from assistant_runner.services.run_monitor import RunMonitor
from assistant_runner.services.tools import WRITE_FILE_TOOL

ASSISTANT_NAME = "File Writer"
ASSISTANT_INSTRUCTIONS = (
    "You are a helpful assistant. When the user asks you to save or write "
    "something, call the writeFile tool with a plain file name and the full "
    "text content, then confirm what you wrote."
)


@dataclass
class Conversation:
    assistant_id: str
    thread_id: str
    created: list = field(default_factory=list)


def ensure_assistant(client, settings, created):
    if settings.assistant_id:
        return settings.assistant_id
    assistant = create_assistant(
        client,
        model=settings.model,
        name=ASSISTANT_NAME,
        instructions=ASSISTANT_INSTRUCTIONS,
        tools=[WRITE_FILE_TOOL],
    )
    created.append(("assistant", assistant.id))
    return assistant.id


def ensure_thread(client, settings, created):
    if settings.thread_id:
        # fails fast on a stale or mistyped id
        retrieve_thread(client, settings.thread_id)
        return settings.thread_id
    thread = create_thread(client)
    created.append(("thread", thread.id))
    return thread.id


def open_conversation(client, settings) -> Conversation:
    created = []
    assistant_id = ensure_assistant(client, settings, created)
    thread_id = ensure_thread(client, settings, created)
    logging.info(
        "[Conversation] Using assistant %s and thread %s", assistant_id, thread_id
    )
    return Conversation(assistant_id=assistant_id, thread_id=thread_id, created=created)


def run_conversation(client, settings, message, conversation=None, monitor=None):
    """
    Post `message`, start a run and block until the run is finished.
    Returns the RunOutcome; RunFailedError / RunTimeoutError propagate.
    """
    conversation = conversation or open_conversation(client, settings)
    monitor = monitor or RunMonitor(
        client,
        poll_interval=settings.poll_interval,
        max_wait=settings.max_wait,
        output_dir=settings.output_dir,
    )

    add_message(client, conversation.thread_id, message)
    run = create_run(client, conversation.thread_id, conversation.assistant_id)
    return monitor.wait(conversation.thread_id, run.id)


def cleanup(client, conversation):
    # threads before assistants
    for kind, resource_id in sorted(
        conversation.created, key=lambda item: item[0] != "thread"
    ):
        if kind == "thread":
            delete_thread(client, resource_id)
        else:
            delete_assistant(client, resource_id)
    conversation.created.clear()
