"""Command execution data models."""

from dataclasses import dataclass


@dataclass
class ExecResult:
    """Result of a remote command execution.

    stdout and stderr are always present, possibly empty or partial.
    error is None exactly when the command succeeded.
    """

    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    exit_status: int | None = None

    @property
    def ok(self) -> bool:
        """Check if the command succeeded."""
        return self.error is None

    def values(self) -> tuple[str, ...]:
        """Return (stdout, stderr) on success, (stdout, stderr, error) on failure."""
        if self.error is None:
            return (self.stdout, self.stderr)
        return (self.stdout, self.stderr, self.error)

    def check(self) -> "ExecResult":
        """Raise CommandError if the command failed.

        Returns:
            This result, for chaining

        Raises:
            CommandError: If error is set
        """
        if self.error is not None:
            from sshexec.services.errors import CommandError

            raise CommandError(self)
        return self
