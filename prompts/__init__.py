"""Prompt templates for the extraction and synthesis stages.

Each template is a ``<name>.txt`` file in this package with ``str.format``
placeholders such as ``{document_text}``.
"""
from functools import lru_cache
from pathlib import Path
import typing as t

PROMPTS_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=None)
def load_prompt(prompt_name: str) -> str:
    """
    Read a template once and keep it for the life of the process.

    Args:
        prompt_name: File name without the .txt extension.

    Raises:
        FileNotFoundError: If there is no such template.
    """
    prompt_file = PROMPTS_DIR / f"{prompt_name}.txt"
    if not prompt_file.is_file():
        raise FileNotFoundError(f"Prompt file not found: {prompt_file}")
    return prompt_file.read_text(encoding="utf-8")


def render_prompt(prompt_name: str, **values: t.Any) -> str:
    """Fill a template's placeholders.

    Raises:
        KeyError: If a placeholder has no value.
    """
    return load_prompt(prompt_name).format(**values)
