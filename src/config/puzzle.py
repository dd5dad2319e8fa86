"""Puzzle configuration dataclasses, all frozen and slotted for immutability."""

from dataclasses import dataclass, field

LABEL_WIDTH = 3


@dataclass(frozen=True, slots=True)
class LabelRules:
    """Label classification rules for start and accepting nodes."""

    start_suffix: str = "A"  # multi-walk start nodes end with this
    accept_suffix: str = "Z"  # multi-walk accepting nodes end with this
    single_start: str = "AAA"
    single_terminal: str = "ZZZ"

    def __post_init__(self) -> None:
        for name in ("start_suffix", "accept_suffix"):
            value = getattr(self, name)
            if len(value) != 1:
                raise ValueError(
                    f"{name} must be a single character, got {value!r}"
                )
        for name in ("single_start", "single_terminal"):
            value = getattr(self, name)
            if len(value) != LABEL_WIDTH:
                raise ValueError(
                    f"{name} must be {LABEL_WIDTH} characters, got {value!r}"
                )

    def is_start(self, label: str) -> bool:
        return label.endswith(self.start_suffix)

    def is_accepting(self, label: str) -> bool:
        return label.endswith(self.accept_suffix)

    def is_single_start(self, label: str) -> bool:
        return label == self.single_start

    def is_single_terminal(self, label: str) -> bool:
        return label == self.single_terminal


@dataclass(frozen=True, slots=True)
class BudgetConfig:
    """Step-budget safeguard for walks that never terminate."""

    max_steps: int | None = None  # None derives the bound from graph size

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError(
                f"max_steps must be positive, got {self.max_steps}"
            )


@dataclass(frozen=True, slots=True)
class PuzzleConfig:
    """Top-level puzzle configuration composing all sub-configs.

    Cross-parameter validation runs in __post_init__ to reject invalid
    configurations early.
    """

    labels: LabelRules = field(default_factory=LabelRules)
    budget: BudgetConfig = field(default_factory=BudgetConfig)

    def __post_init__(self) -> None:
        if self.labels.start_suffix == self.labels.accept_suffix:
            raise ValueError(
                f"start_suffix and accept_suffix must differ, both are "
                f"{self.labels.start_suffix!r}"
            )
