from pathlib import Path

from docfiler.classification.exceptions import ClassificationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt_template(path: Path | None = None) -> str:
    """Load the classification system prompt template.

    Args:
        path: Path to the template file.
              Defaults to the bundled system_prompt.txt.

    Returns:
        The raw template string with {taxonomy} and {catch_all_folder} placeholders.

    Raises:
        ClassificationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "system_prompt.txt", "system prompt")


def load_user_prompt_template(path: Path | None = None) -> str:
    """Load the per-document user prompt template.

    Raises:
        ClassificationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "user_prompt.txt", "user prompt")


def _read(path: Path, label: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ClassificationError(f"Failed to load {label} template: {exc}") from exc
