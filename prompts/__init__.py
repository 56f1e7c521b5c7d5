"""Prompt templates shipped with the assistant.

Templates are ``.txt`` files next to this module. Placeholders use
``string.Template`` syntax (``$course_id``) so the JSON examples inside a
prompt need no brace escaping.
"""
from pathlib import Path
from string import Template
import typing as t

PROMPTS_DIR = Path(__file__).resolve().parent


def load_prompt(prompt_name: str, prompts_dir: t.Optional[Path] = None) -> str:
    """
    Read the template ``<prompt_name>.txt``.

    Args:
        prompt_name: Template name without the extension
        prompts_dir: Directory to read from (default: this package)

    Raises:
        FileNotFoundError: If no such template exists.
    """
    prompt_file = Path(prompts_dir or PROMPTS_DIR) / f"{prompt_name}.txt"
    if not prompt_file.is_file():
        raise FileNotFoundError(f"Prompt template not found: {prompt_file}")
    return prompt_file.read_text(encoding="utf-8")


def render_prompt(prompt_name: str, **values: t.Any) -> str:
    """Load a template and fill its ``$name`` placeholders.

    Placeholders without a value are left as-is.
    """
    return Template(load_prompt(prompt_name)).safe_substitute(
        {key: str(value) for key, value in values.items()}
    )
