from dataclasses import dataclass


@dataclass
class CollectorResult:
    """Outcome of one collector within a pass."""

    name: str
    pending: int = 0
    sent: int = 0

    def add(self, pending=0, sent=0):
        self.pending += pending
        self.sent += sent
        return self
