"""SSH transport lifecycle for a connection handle."""

import asyncio
import logging
from typing import TYPE_CHECKING

import asyncssh

from sshexec.services.errors import ConnectionError

if TYPE_CHECKING:
    from sshexec.config import TrustPolicy
    from sshexec.models import ConnectionHandle, SSHTarget

logger = logging.getLogger(__name__)


async def open_connection(
    handle: "ConnectionHandle",
    target: "SSHTarget",
    trust: "TrustPolicy",
    timeout: int,
) -> None:
    """Dial target with password auth and store the transport on handle.

    Any transport already held is closed first. On failure the handle is
    left without a transport.

    Args:
        handle: Handle to store the new transport on
        target: Host, port and credentials
        trust: Host key trust policy
        timeout: Dial deadline in seconds, 0 for none

    Raises:
        ConnectionError: If the dial or authentication fails
    """
    if handle.connection is not None:
        logger.info("Replacing existing connection before dialing %s", target.address)
        await close_connection(handle)

    logger.info("Opening SSH connection to %s", target.display)
    try:
        conn = await asyncssh.connect(
            target.host,
            port=target.port,
            username=target.username,
            password=target.password,
            known_hosts=trust.known_hosts(),
            client_keys=None,
            agent_path=None,
            connect_timeout=timeout or None,
        )
    except (asyncssh.Error, OSError, asyncio.TimeoutError) as e:
        logger.warning("Connection to %s failed: %s", target.address, e)
        raise ConnectionError(target.address, e) from e

    handle.connection = conn
    logger.info("SSH connection established to %s", target.display)


async def close_connection(handle: "ConnectionHandle") -> bool:
    """Close and unset the handle's transport.

    Safe to call when no transport is held.

    Returns:
        True if a transport was closed
    """
    conn = handle.connection
    if conn is None:
        logger.debug("No connection to close")
        return False

    handle.connection = None
    logger.info("Closing SSH connection")
    conn.close()
    await conn.wait_closed()
    return True
