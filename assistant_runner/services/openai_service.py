import logging
import threading
from typing import Iterator, Optional

from openai import OpenAI

from assistant_runner.config import DEFAULT_MAX_RETRIES, DEFAULT_MODEL


class OpenAIClientProvider:
    """
    Hands out one shared OpenAI client, built on first use.
    A failed build is not cached, so the next provide() tries again.
    """

    def __init__(
        self, api_key: Optional[str] = None, max_retries: int = DEFAULT_MAX_RETRIES
    ):
        self.api_key = api_key
        self.max_retries = max_retries
        self._instance = None
        self._lock = threading.Lock()

    def provide(self) -> OpenAI:
        if self._instance is not None:
            return self._instance
        with self._lock:
            if self._instance is None:
                self._instance = OpenAI(
                    api_key=self.api_key, max_retries=self.max_retries
                )
                logging.info(
                    "[OpenAI] Client created (max_retries=%s)", self.max_retries
                )
        return self._instance


# --- assistants -------------------------------------------------------------


def create_assistant(client, model, name, instructions, tools=None):
    assistant = client.beta.assistants.create(
        model=model,
        name=name,
        instructions=instructions,
        tools=tools or [],
    )
    logging.info("[OpenAI] Created assistant %s (%s)", assistant.id, model)
    return assistant


def list_assistants(client, limit=20):
    return list(client.beta.assistants.list(limit=limit).data)


def delete_assistant(client, assistant_id):
    result = client.beta.assistants.delete(assistant_id)
    logging.info("[OpenAI] Deleted assistant %s", assistant_id)
    return result


# --- threads & messages -----------------------------------------------------


def create_thread(client):
    thread = client.beta.threads.create()
    logging.info("[OpenAI] Created thread %s", thread.id)
    return thread


def retrieve_thread(client, thread_id):
    return client.beta.threads.retrieve(thread_id)


def delete_thread(client, thread_id):
    result = client.beta.threads.delete(thread_id)
    logging.info("[OpenAI] Deleted thread %s", thread_id)
    return result


def add_message(client, thread_id, content, role="user"):
    message = client.beta.threads.messages.create(
        thread_id=thread_id, role=role, content=content
    )
    logging.debug("[OpenAI] Added %s message %s to %s", role, message.id, thread_id)
    return message


def list_messages(client, thread_id, limit=50):
    # NEWEST → OLDEST; iterating the page fetches the following pages too
    return list(client.beta.threads.messages.list(thread_id=thread_id, limit=limit))


# --- runs -------------------------------------------------------------------


def create_run(client, thread_id, assistant_id):
    run = client.beta.threads.runs.create(
        thread_id=thread_id, assistant_id=assistant_id
    )
    logging.info("[OpenAI] Created run %s for thread %s", run.id, thread_id)
    return run


def retrieve_run(client, thread_id, run_id):
    return client.beta.threads.runs.retrieve(thread_id=thread_id, run_id=run_id)


def submit_tool_outputs(client, thread_id, run_id, tool_outputs):
    return client.beta.threads.runs.submit_tool_outputs(
        thread_id=thread_id, run_id=run_id, tool_outputs=tool_outputs
    )


# --- chat completions -------------------------------------------------------


def stream_chat_completion(client, prompt: str, model: str = DEFAULT_MODEL) -> Iterator[str]:
    """
    Stream a single-turn chat completion and yield the text of every chunk.
    Chunks without content (role headers, the final stop chunk) yield "".
    """
    stream = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        stream=True,
    )
    for chunk in stream:
        choice = chunk.choices[0] if chunk.choices else None
        delta = getattr(choice, "delta", None)
        yield getattr(delta, "content", None) or ""
