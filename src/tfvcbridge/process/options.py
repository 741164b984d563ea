"""Per-invocation subprocess options."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class ExecOptions:
    """Options for one tool invocation.

    Attributes:
        cwd: Working directory for the tool process.
        environment_overrides: Variables layered over os.environ.
        suppress_logging: Keep the command line and result off the output log.
        direct: Pass arguments on argv instead of the cached stdin process.
    """

    cwd: str | None = None
    environment_overrides: dict[str, str] = field(default_factory=dict)
    suppress_logging: bool = False
    direct: bool = False

    def __post_init__(self) -> None:
        for key, value in self.environment_overrides.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError(
                    f"environment override {key!r} must map str to str, got {value!r}"
                )

    def with_cwd(self, cwd: str | None) -> ExecOptions:
        """Return a copy using ``cwd`` unless this instance already names one."""
        if self.cwd or not cwd:
            return self
        return replace(self, cwd=cwd)

    def with_environment(self, overrides: dict[str, str]) -> ExecOptions:
        """Return a copy with ``overrides`` layered over the existing ones."""
        if not overrides:
            return self
        return replace(
            self, environment_overrides={**self.environment_overrides, **overrides}
        )

    @property
    def pool_key(self) -> tuple[str | None, tuple[tuple[str, str], ...]]:
        """The part of the options a cached process was spawned with."""
        return (self.cwd, tuple(sorted(self.environment_overrides.items())))
