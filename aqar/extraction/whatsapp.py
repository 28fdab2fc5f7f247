"""
Chat Export Parser

Parses exported WhatsApp group chats into ChatMessage records, running field
extraction on every message body.

Supported line shapes:
- [1/7/25, 10:30:25 AM] Sender: message
- [1/7/25, 10:30] Sender: message
- 1/7/2025, 10:30 - Sender: message is NOT supported (Android "-" export)

Lines that do not match (system notices, wrapped continuation lines) are
skipped and counted.
"""

import logging
import re
from typing import List, Optional

from .extractor import extract
from .models import ChatMessage

logger = logging.getLogger(__name__)

MESSAGE_LINE_PATTERN = re.compile(
    r"^\[?(\d{1,2}/\d{1,2}/\d{2,4}),?\s*(\d{1,2}:\d{2}(?::\d{2})?(?:\s*[AP]M)?)\]?\s*([^:]+):\s*(.+)$"
)

PROGRESS_LOG_INTERVAL = 100


def parse_message(line: Optional[str]) -> Optional[ChatMessage]:
    """
    Parse one exported chat line.

    Args:
        line: Raw line from the export file

    Returns:
        ChatMessage with extracted fields, or None if the line is not a message
    """
    if not line:
        return None

    match = MESSAGE_LINE_PATTERN.match(line.strip())
    if not match:
        return None

    date, time, sender, message = match.groups()
    message = message.strip()

    return ChatMessage(
        sender=sender.strip(),
        message=message,
        timestamp=f"{date} {time}",
        fields=extract(message),
    )


def parse_chat_export(content: Optional[str]) -> List[ChatMessage]:
    """
    Parse a whole chat export.

    Args:
        content: Full text of the export file

    Returns:
        Parsed messages in file order
    """
    if not content:
        return []

    lines = content.splitlines()
    logger.info(f"Parsing chat export: {len(lines)} lines, {len(content)} chars")

    messages: List[ChatMessage] = []
    skipped = 0

    for line in lines:
        if not line.strip():
            continue

        parsed = parse_message(line)
        if parsed is None:
            skipped += 1
            continue

        messages.append(parsed)
        if len(messages) % PROGRESS_LOG_INTERVAL == 0:
            logger.info(f"Processed {len(messages)} messages so far...")

    logger.info(f"Parsing complete: {len(messages)} messages parsed, {skipped} lines skipped")
    return messages
