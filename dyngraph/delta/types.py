"""Delta data structures: a pending batch of edge insertions and deletions."""

from dataclasses import dataclass, field

EdgePair = tuple[int, int]


@dataclass(slots=True)
class GraphDelta:
    """Pending edge changes planned against a graph snapshot.

    A delta is a plan, not a view: it holds vertex id pairs only and has no
    reference to the graph it was sampled from.
    """

    insertions: list[EdgePair] = field(default_factory=list)
    deletions: list[EdgePair] = field(default_factory=list)

    def render(self) -> str:
        """One line per change: "+ (u, v)" for insertions, "- (u, v)" for deletions."""
        lines = [f"+ ({u}, {v})" for u, v in self.insertions]
        lines.extend(f"- ({u}, {v})" for u, v in self.deletions)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.insertions) + len(self.deletions)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class RoundStats:
    """Graph state after one generate-and-apply round."""

    round: int
    insertions: int  # pairs queued for insertion
    deletions: int  # pairs queued for deletion
    order: int  # valid vertices after applying
    size: int  # live edges after applying
    elapsed: float  # seconds spent generating and applying
