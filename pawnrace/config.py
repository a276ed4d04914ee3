from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)

MAX_SEARCH_DEPTH = 8
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class EngineConfig:
    """Runtime options shared by the CLI and the bridge.

    Values arrive from command-line flags or ``setoption`` lines; nothing is
    read from the process environment.
    """

    agent: str = "greedy"
    seed: Optional[int] = None
    search_depth: int = 2
    swap_glyphs: bool = False
    log_level: str = "INFO"

    def set_option(self, name: str, value: str) -> bool:
        """Update one option from text; return False if it was ignored.

        Unknown names and unparsable values are ignored, numbers are clamped.
        """
        name = name.strip().lower()
        value = value.strip()
        if name == "agent":
            if not value:
                return False
            self.agent = value.lower()
        elif name == "seed":
            try:
                self.seed = int(value)
            except ValueError:
                return False
        elif name in ("depth", "searchdepth", "search_depth"):
            try:
                d = int(value)
            except ValueError:
                return False
            self.search_depth = max(1, min(MAX_SEARCH_DEPTH, d))
        elif name in ("swapglyphs", "swap_glyphs"):
            lowered = value.lower()
            if lowered in ("true", "1", "yes", "on"):
                self.swap_glyphs = True
            elif lowered in ("false", "0", "no", "off"):
                self.swap_glyphs = False
            else:
                return False
        elif name in ("loglevel", "log_level"):
            upper = value.upper()
            if upper not in LOG_LEVELS:
                return False
            self.log_level = upper
            logging.getLogger("pawnrace").setLevel(upper)
        else:
            return False
        logger.debug("option set", extra={"option": name, "value": value})
        return True
