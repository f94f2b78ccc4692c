from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from .enums import Outcome


@dataclass(frozen=True)
class FlowResult:
    """What a flow decided, plus the one-time notice the controller should flash.

    ``values`` echoes the submitted (normalized) fields back so a re-rendered
    form stays sticky. ``credential`` is set when a new credential artifact was
    issued and must be written to the response.
    """

    outcome: Outcome
    notice: Optional[str] = None
    errors: Sequence[str] = ()
    values: Mapping[str, Any] = field(default_factory=dict)
    credential: Optional[Any] = None
    record: Optional[Any] = None
