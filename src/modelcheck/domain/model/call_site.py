"""Call site value object."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.enums import ReceiverOrigin


@dataclass(frozen=True, slots=True)
class CallSite:
    """One receiver chain found in a method body.

    `invoice.customer.address.street` inside a method taking `invoice`
    becomes origin=PARAMETER, root="invoice", root_class="Invoice",
    chain=("customer", "address", "street").

    Immutable value object with FAIL-FIRST validation.

    Attributes:
        origin: SELF, PARAMETER or EXTERNAL
        root: Receiver root ("self", parameter name, external identifier)
        chain: Accessor/method names applied in order after the root
        line: Line number in source (1-based)
        root_class: Static class of the root, if known
        target_class: Class the final call lands on, if the parser resolved it
    """

    origin: ReceiverOrigin
    root: str
    chain: tuple[str, ...]
    line: int
    root_class: str | None = None
    target_class: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.root:
            raise ValueError("root must not be empty")
        if not self.chain:
            raise ValueError("chain must contain at least one name")
        if any(not name for name in self.chain):
            raise ValueError(f"chain contains an empty name: {self.chain!r}")
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.origin is ReceiverOrigin.SELF and self.root != "self":
            raise ValueError(f"SELF origin requires root 'self', got {self.root!r}")

    @property
    def length(self) -> int:
        """Number of names applied after the root."""
        return len(self.chain)

    @property
    def terminal(self) -> str:
        """Last name of the chain (the member finally accessed or called)."""
        return self.chain[-1]

    @property
    def expression(self) -> str:
        """Dotted receiver expression, e.g. self.customer.address."""
        return ".".join((self.root, *self.chain))

    def __str__(self) -> str:
        """Format as expression@line."""
        return f"{self.expression}@{self.line}"
