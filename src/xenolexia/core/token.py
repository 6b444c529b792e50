"""Token entity - one word occurrence in chapter HTML."""

from dataclasses import dataclass
from typing import Literal, Optional

ProtectionType = Literal["quote", "name"]


@dataclass
class Token:
    """Represents a single word occurrence with its position in the source HTML."""

    word: str
    """Lowercased surface form (e.g., "house", "résumé" for "r&eacute;sum&eacute;")"""

    original: str
    """Exact text as written in the source (e.g., "House")"""

    start_index: int
    """Character offset in the original HTML (inclusive)"""

    end_index: int
    """Character offset in the original HTML (exclusive)"""

    prefix: str
    """Source text between the previous token and this one (markup, punctuation, whitespace)"""

    suffix: str
    """Source text between this token and the next one, or up to the end of input"""

    is_protected: bool = False
    """True if the token must never be substituted"""

    protection_type: Optional[ProtectionType] = None
    """Why the token is protected, if it is"""

    surface: str = ""
    """The word as a reader sees it: original with character entities decoded"""

    @property
    def text(self) -> str:
        return self.surface or self.original

    @property
    def length(self) -> int:
        return self.end_index - self.start_index
