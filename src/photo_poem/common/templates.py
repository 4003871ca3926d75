"""Prompt templating helpers."""
from __future__ import annotations
from pathlib import Path
from typing import Iterable

LABEL_SEPARATOR = ", "

# First-person poetic story, about 50 characters, with a complete ending.
PROMPT_TEMPLATE = (
    "以第一人稱視角創作一篇詩意故事，結合以下照片標籤: {{labels}}，"
    '以及創作者的文字紀錄: "{{input}}"。'
    "故事需具有深刻的意義，捕捉兩者特質，富有韻律與美感，"
    "並且應該追求故事精要簡潔在50字內結束並且有一個完整的結尾。"
    "故事必須完整，且不能中斷。"
)

def load_template(path: str) -> str:
    """
    Load a prompt template file.

    Args:
        path: Path to template.
    """
    return Path(path).read_text(encoding="utf-8")

def render_prompt(template: str, labels: str, user_input: str) -> str:
    """
    Render joined labels and user input into the template.

    Args:
        template: Template content containing {{labels}} and {{input}}.
        labels: Already-joined label string.
        user_input: Input string, embedded verbatim.

    Returns:
        Rendered prompt.
    """
    # labels first so a literal "{{labels}}" in the user text stays untouched
    return template.replace("{{labels}}", labels).replace("{{input}}", user_input)

def compose_prompt(labels: Iterable[str], text: str, template: str = PROMPT_TEMPLATE) -> str:
    """Build the generation prompt from concept labels and the user's note."""
    return render_prompt(template, LABEL_SEPARATOR.join(labels), text)
