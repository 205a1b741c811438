from typing import Optional


def page_number(page: Optional[int]) -> int:
    return max(1, page or 1)


def page_size(take: Optional[int], default: int, maximum: int) -> int:
    """Clamp a requested page size into [1, maximum]; missing means ``default``."""
    if take is None:
        return default
    return max(1, min(maximum, take))
