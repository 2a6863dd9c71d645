"""Configuration module for sshexec.

- Settings: Environment variable configuration
- TrustPolicy: SSH host key trust policies
"""

from sshexec.config.host_keys import (
    AcceptAnyHostKey,
    KnownHostsPolicy,
    TrustPolicy,
    trust_policy_from_settings,
)
from sshexec.config.settings import Settings

__all__ = [
    "AcceptAnyHostKey",
    "KnownHostsPolicy",
    "Settings",
    "TrustPolicy",
    "trust_policy_from_settings",
]
