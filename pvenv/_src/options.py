from typing import Iterable, List

from pvenv._src.models.options import ParsedOptions


def parse_options(argv: Iterable[str]) -> ParsedOptions:
    """Split raw arguments into flags and positional arguments.

    `-xyz` expands to the flags `x`, `y` and `z`, `--name` is the single
    flag `name` and everything else is positional. Nothing is validated
    here, unknown flags are forwarded to the backend as they are.
    """
    options: List[str] = []
    arguments: List[str] = []
    for token in argv:
        if token.startswith("--") and len(token) > 2:
            options.append(token[2:])
        elif token.startswith("-") and len(token) > 1 and token[1] != "-":
            options.extend(token[1:])
        else:
            arguments.append(token)
    return ParsedOptions(options=tuple(options), arguments=tuple(arguments))


def format_option(name: str) -> str:
    """Render a parsed flag back into command line form"""
    if len(name) == 1:
        return f"-{name}"
    return f"--{name}"
