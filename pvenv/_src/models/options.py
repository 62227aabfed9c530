from typing import Tuple

from pydantic import BaseModel, ConfigDict


class ParsedOptions(BaseModel):
    """Flags and positional arguments of a single invocation

    Flags are stored without their leading dashes, in the order they
    appeared on the command line. Bundled short flags are already split,
    so `-fu` shows up as `f` and `u`.
    """
    model_config = ConfigDict(frozen=True)

    options: Tuple[str, ...] = ()
    arguments: Tuple[str, ...] = ()

    def has(self, *names: str) -> bool:
        return any(name in self.options for name in names)
