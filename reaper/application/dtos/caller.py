"""DTO for the authenticated caller of a manual reap."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Caller:
    """Identity and permission codes taken from a verified token."""

    identity: str
    permissions: frozenset[str] = field(default_factory=frozenset)
