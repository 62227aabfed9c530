from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class VirtualenvInfo(BaseModel):
    """A virtualenv found under `<root>/versions`"""
    name: str
    path: Path
    home: Optional[Path] = None
    version: Optional[str] = None

    @property
    def prefix(self) -> Optional[Path]:
        """Prefix of the interpreter the virtualenv was created from"""
        if self.home is None:
            return None
        return self.home.parent
