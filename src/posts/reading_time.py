import math

from src.content.richtext import as_text
from src.content.schemas import ContentBlock

WORDS_PER_MINUTE = 200


def estimate_reading_time(content: list[ContentBlock]) -> int:
    """Estimate how many minutes it takes to read a post's content blocks.

    Body text is counted word by word, while headings add a single unit per
    block that carries one, regardless of how many words the heading has.
    """
    body_nodes = [node for block in content for node in block.body]
    body_words = len(as_text(body_nodes).split())

    heading_units = len([block for block in content if block.heading])

    return math.ceil((body_words + heading_units) / WORDS_PER_MINUTE)


def format_reading_time(minutes: int) -> str:
    return f"{minutes} min"
