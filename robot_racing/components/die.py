from dataclasses import dataclass
from typing import Tuple

from robot_racing.types import CommandKind


@dataclass(frozen=True)
class Die:
    """A die whose faces are command kinds.

    Attributes:
        faces: Command kinds the die can show; each face is equally likely.
    """

    faces: Tuple[CommandKind, ...]

    def __post_init__(self) -> None:
        if not self.faces:
            raise ValueError("Die needs at least one face")
        if CommandKind.RETURN_TO_ORIGIN in self.faces:
            raise ValueError("RETURN_TO_ORIGIN cannot be a die face")
