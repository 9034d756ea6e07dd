def message_text(message) -> str:
    """
    Join the text parts of a thread message. Non-text parts (images, files)
    are shown as a short placeholder.
    """
    parts = []
    for part in message.content or []:
        text = getattr(part, "text", None)
        if text is not None and getattr(text, "value", None) is not None:
            parts.append(text.value)
        else:
            parts.append(f"[{getattr(part, 'type', 'unknown')}]")
    return "\n".join(parts).strip()


def format_message(message) -> str:
    return f"{message.role}: {message_text(message)}"


def format_transcript(messages) -> list:
    return [format_message(m) for m in messages]
