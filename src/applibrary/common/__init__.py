from __future__ import annotations

from .channel import ChannelClosedError, LatestValueChannel

__all__ = ["ChannelClosedError", "LatestValueChannel"]
