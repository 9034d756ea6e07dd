import json
import logging
import os
import re

from assistant_runner.config import DEFAULT_OUTPUT_DIR
from assistant_runner.errors import (
    InvalidFilenameError,
    ToolArgumentsError,
    ToolExecutionError,
    UnknownToolError,
)

SUCCESS = "success"

WRITE_FILE_TOOL = {
    "type": "function",
    "function": {
        "name": "writeFile",
        "description": "Write a text file with the given name and content",
        "parameters": {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Plain file name, e.g. notes.txt (no directories)",
                },
                "content": {
                    "type": "string",
                    "description": "Full text content of the file",
                },
            },
            "required": ["name", "content"],
        },
    },
}

_FORBIDDEN = re.compile(r"[/\\\x00]")


def validate_filename(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidFilenameError(name, "name is empty")
    if _FORBIDDEN.search(name):
        raise InvalidFilenameError(name, "path separators are not allowed")
    if ".." in name or name == ".":
        raise InvalidFilenameError(name, "traversal sequences are not allowed")
    if os.path.isabs(name) or os.path.splitdrive(name)[0]:
        raise InvalidFilenameError(name, "absolute paths are not allowed")
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidFilenameError(name, "name is not valid UTF-8") from None
    return name


def write_file(name, content, output_dir=DEFAULT_OUTPUT_DIR) -> str:
    """
    Write `content` to `output_dir/name` (UTF-8, overwriting) and return "success".
    """
    validate_filename(name)
    if not isinstance(content, str):
        raise ToolArgumentsError(f"content for {name!r} must be a string")

    try:
        data = content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ToolExecutionError(name, e) from e

    path = os.path.join(output_dir, name)
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(path, "wb") as fh:
            fh.write(data)
    except OSError as e:
        raise ToolExecutionError(name, e) from e

    logging.info("[Tools] Wrote %d chars to %s", len(content), path)
    return SUCCESS


def _write_file_handler(arguments, output_dir):
    try:
        name = arguments["name"]
        content = arguments["content"]
    except KeyError as e:
        raise ToolArgumentsError(f"writeFile is missing argument {e.args[0]!r}") from None
    return write_file(name, content, output_dir=output_dir)


TOOL_HANDLERS = {
    "writeFile": _write_file_handler,
}


def parse_arguments(arguments_json):
    if not arguments_json:
        return {}
    try:
        arguments = json.loads(arguments_json)
    except json.JSONDecodeError as e:
        raise ToolArgumentsError(f"arguments are not valid JSON: {e}") from e
    if not isinstance(arguments, dict):
        raise ToolArgumentsError("arguments must be a JSON object")
    return arguments


def execute_tool_call(name, arguments_json, output_dir=DEFAULT_OUTPUT_DIR) -> str:
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise UnknownToolError(name)
    return handler(parse_arguments(arguments_json), output_dir)
