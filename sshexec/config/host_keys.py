"""SSH host key trust policies.

The default policy accepts any host key. Swap in KnownHostsPolicy to
verify servers against a known_hosts file.
"""

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sshexec.config.settings import Settings

logger = logging.getLogger(__name__)


class TrustPolicy:
    """Decides how asyncssh verifies the server's host key."""

    name = "base"

    def known_hosts(self) -> str | None:
        """Get the known_hosts argument for asyncssh.connect.

        Returns:
            Path to a known_hosts file, or None to skip verification
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class AcceptAnyHostKey(TrustPolicy):
    """Trust every server. Vulnerable to MITM attacks."""

    name = "accept-any"

    def __init__(self) -> None:
        self._warned = False

    def known_hosts(self) -> None:
        if not self._warned:
            logger.warning(
                "SSH host key verification DISABLED - vulnerable to MITM attacks. "
                "Set SSHEXEC_KNOWN_HOSTS to a valid known_hosts file path."
            )
            self._warned = True
        return None


class KnownHostsPolicy(TrustPolicy):
    """Verify servers against a known_hosts file."""

    name = "known-hosts"

    def __init__(self, path: str):
        """Initialize known_hosts policy.

        Args:
            path: Path to known_hosts file (~ is expanded)

        Raises:
            FileNotFoundError: If the file does not exist
        """
        resolved = Path(os.path.expanduser(path))
        if not resolved.exists():
            raise FileNotFoundError(
                f"SSH host key verification required but specified "
                f"known_hosts file not found: {resolved}\n\n"
                f"To fix this:\n"
                f"1. Add host keys: ssh-keyscan <hostname> >> {resolved}\n"
                f"2. Or disable verification (NOT RECOMMENDED): "
                f"SSHEXEC_KNOWN_HOSTS=none"
            )
        self.path = str(resolved)
        logger.info("SSH host key verification enabled (known_hosts=%s)", self.path)

    def known_hosts(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"KnownHostsPolicy({self.path!r})"


def trust_policy_from_settings(settings: "Settings") -> TrustPolicy:
    """Select a trust policy from settings.

    Unset or 'none' accepts any host key; anything else is a known_hosts path.
    """
    value = settings.known_hosts
    if not value or value.lower() == "none":
        return AcceptAnyHostKey()
    return KnownHostsPolicy(value)
