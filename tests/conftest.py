from __future__ import annotations

from collections import deque

from checkping import Idle, Prober


class ScriptedProber(Prober):
    """Returns queued outcomes in order, then ``Idle`` once the script runs out."""

    def __init__(self, outcomes=None):
        self.outcomes = deque(outcomes or [])
        self.calls: list[tuple[str, float]] = []

    def probe(self, host, timeout):
        self.calls.append((host, timeout))
        if self.outcomes:
            return self.outcomes.popleft()
        return Idle()
