import typer


def ask(message: str) -> str:
    return typer.prompt(message, default="", show_default=False, prompt_suffix=" ")


def confirmed(answer: str) -> bool:
    """Only answers starting with `y` or `Y` count as yes"""
    return answer.strip()[:1] in ("y", "Y")
