"""Run configuration dataclasses, all frozen and slotted for immutability."""

from dataclasses import dataclass, field

DELTA_MODELS: tuple[str, ...] = (
    "uniform_mixed",
    "preferential_attachment",
    "preferential_detachment",
    "preferential_mixed",
)


@dataclass(frozen=True, slots=True)
class GraphSourceConfig:
    """Where the initial graph comes from."""

    path: str = ""  # .mtx file; empty builds a random graph instead
    n: int = 1000  # vertices of the random graph
    initial_edges: int = 5000  # uniform strict insertions into the random graph
    weighted: bool = False  # keep .mtx values as edge payloads


@dataclass(frozen=True, slots=True)
class DeltaConfig:
    """Delta sampling model and parameters."""

    model: str = "preferential_mixed"  # one of DELTA_MODELS
    count: int = 100  # changes per round
    insert_fraction: float = 0.5  # share of count spent on insertions (mixed models)
    alpha: float = 0.0  # baseline log-weight
    beta: float = 1.0  # in-degree sensitivity
    lam: float = 0.0  # weight floor
    strict_preferential: bool = False  # weight the source vertex too
    strict_delta: bool = True  # every change mutates the graph, no duplicates


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Top-level run configuration composing the graph and delta configs.

    Cross-parameter validation runs in __post_init__ to reject invalid
    configurations early.
    """

    graph: GraphSourceConfig = field(default_factory=GraphSourceConfig)
    delta: DeltaConfig = field(default_factory=DeltaConfig)
    rounds: int = 10
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.delta.model not in DELTA_MODELS:
            raise ValueError(
                f"delta.model must be one of {DELTA_MODELS}, "
                f"got {self.delta.model!r}"
            )
        if self.delta.count < 0:
            raise ValueError(f"delta.count must be >= 0, got {self.delta.count}")
        if not 0.0 <= self.delta.insert_fraction <= 1.0:
            raise ValueError(
                f"delta.insert_fraction must be in [0, 1], "
                f"got {self.delta.insert_fraction}"
            )
        if self.rounds < 0:
            raise ValueError(f"rounds must be >= 0, got {self.rounds}")
        if not self.graph.path:
            if self.graph.n < 0:
                raise ValueError(f"graph.n must be >= 0, got {self.graph.n}")
            max_edges = self.graph.n * (self.graph.n - 1)
            if not 0 <= self.graph.initial_edges <= max_edges:
                raise ValueError(
                    f"graph.initial_edges ({self.graph.initial_edges}) must be "
                    f"in [0, n * (n - 1) = {max_edges}]"
                )
