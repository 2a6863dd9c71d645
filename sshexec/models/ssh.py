"""SSH-related data models."""

from dataclasses import dataclass, field


@dataclass
class SSHTarget:
    """Remote host and password credentials for one connect call."""

    host: str
    port: int = 22
    username: str = "root"
    password: str = field(default="", repr=False)

    @property
    def address(self) -> str:
        """Get the host:port string used in messages.

        Returns:
            Address in host:port form
        """
        return f"{self.host}:{self.port}"

    @property
    def display(self) -> str:
        """Get user@host:port for log lines."""
        return f"{self.username}@{self.address}"
