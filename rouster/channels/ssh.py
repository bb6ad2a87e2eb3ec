"""SSH channel backed by asyncssh.

Rouster is synchronous, so the channel owns a private event loop and runs
each asyncssh coroutine to completion on it. One connection is opened lazily
and reused until close().
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import asyncssh

from rouster.errors import RemoteExecutionError, RousterError
from rouster.models import SSHHost
from rouster.protocols import ChannelOptions, OutputCallback
from rouster.utils.shell import sudo_wrap

logger = logging.getLogger(__name__)

READ_SIZE = 8192


class SSHChannel:
    """Channel to one machine over SSH.

    The host is either given up front or produced by ``host_resolver`` on
    every (re)connect, which lets a Vagrant machine pick up a new forwarded
    port after it is brought up again.
    """

    def __init__(
        self,
        host: SSHHost | None = None,
        *,
        host_resolver: Callable[[], SSHHost] | None = None,
        client_keys: list[str] | None = None,
        known_hosts: str | None = None,
        strict_host_key_checking: bool = False,
        connect_timeout: float = 10,
    ) -> None:
        """Initialize the channel without connecting.

        Args:
            host: SSH endpoint of the machine
            host_resolver: Callable returning the endpoint, used when host is None
            client_keys: Private key paths (default: host.identity_file)
            known_hosts: Path to known_hosts file, or None to disable verification
            strict_host_key_checking: Whether to reject unknown host keys
            connect_timeout: Seconds to wait for the connection handshake

        Raises:
            ValueError: If neither host nor host_resolver is given
        """
        if host is None and host_resolver is None:
            raise ValueError("SSHChannel needs a host or a host_resolver")

        self._host = host
        self._host_resolver = host_resolver
        self._client_keys = client_keys
        self._known_hosts = known_hosts
        self._strict_host_key = strict_host_key_checking
        self._connect_timeout = connect_timeout
        self._loop = asyncio.new_event_loop()
        self._conn: asyncssh.SSHClientConnection | None = None

    def _call(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    def _resolve_host(self) -> SSHHost:
        if self._host is None:
            assert self._host_resolver is not None
            self._host = self._host_resolver()
        return self._host

    async def _connect(self) -> asyncssh.SSHClientConnection:
        if self._conn is not None:
            return self._conn

        host = self._resolve_host()
        client_keys = self._client_keys
        if client_keys is None and host.identity_file:
            client_keys = [host.identity_file]

        logger.info("Opening SSH connection to %s (%s)", host.name, host.address)
        options: dict[str, Any] = {
            "port": host.port,
            "username": host.user,
            "client_keys": client_keys,
            "connect_timeout": self._connect_timeout,
        }
        try:
            conn = await asyncssh.connect(
                host.hostname, known_hosts=self._known_hosts, **options
            )
        except asyncssh.HostKeyNotVerifiable as e:
            if self._strict_host_key:
                logger.error("Host key verification failed for %s: %s", host.name, e)
                raise
            logger.warning(
                "Host key not verified for %s (strict mode disabled): %s",
                host.name,
                e,
            )
            conn = await asyncssh.connect(host.hostname, known_hosts=None, **options)

        self._conn = conn
        logger.debug("SSH connection established to %s", host.name)
        return conn

    async def _pump(
        self,
        stream: Any,
        tag: str,
        callback: OutputCallback,
    ) -> None:
        while True:
            chunk = await stream.read(READ_SIZE)
            if not chunk:
                break
            callback(tag, chunk)

    async def _execute(self, command: str, callback: OutputCallback) -> int | None:
        conn = await self._connect()
        async with conn.create_process(command) as process:
            process.stdin.write_eof()
            await asyncio.gather(
                self._pump(process.stdout, "stdout", callback),
                self._pump(process.stderr, "stderr", callback),
            )
            completed = await process.wait()
        return completed.returncode

    def execute(
        self,
        command: str,
        options: ChannelOptions | None = None,
        callback: OutputCallback | None = None,
    ) -> int | None:
        """Run a command as the login user.

        Returns:
            Exit status; a negative value is the signal that killed the
            command, None means the server reported neither

        Raises:
            RemoteExecutionError: If error_check is on and the exit is non-zero
        """
        if options is None:
            options = ChannelOptions()
        chunks: list[str] = []

        def forward(stream: str, data: str) -> None:
            chunks.append(data)
            if callback is not None:
                callback(stream, data)

        exit_code = self._call(self._execute(command, forward))

        if options.error_check and exit_code not in (0, None):
            raise RemoteExecutionError("".join(chunks), exit_code, command=command)
        return exit_code

    def sudo(
        self,
        command: str,
        options: ChannelOptions | None = None,
        callback: OutputCallback | None = None,
    ) -> int | None:
        """Run a command as root through non-interactive sudo."""
        return self.execute(sudo_wrap(command), options, callback)

    async def _probe(self) -> bool:
        conn = await self._connect()
        result = await conn.run("true", check=False)
        return result.exit_status == 0

    def ready(self) -> bool:
        """Check the machine accepts SSH logins and runs commands.

        Connectivity errors are reported as False and drop the cached
        connection so the next call starts fresh. That includes failing to
        resolve the host (machine not up) and unusable client keys, which
        asyncssh reports as ValueError.
        """
        try:
            return bool(self._call(self._probe()))
        except (OSError, asyncssh.Error, TimeoutError, RousterError, ValueError) as e:
            logger.debug("SSH not ready: %s", e)
            self.close()
            return False

    async def _sftp(self, direction: str, source: str, destination: str) -> None:
        conn = await self._connect()
        async with conn.start_sftp_client() as sftp:
            if direction == "upload":
                await sftp.put(source, destination)
            else:
                await sftp.get(source, destination)

    def upload(self, local_path: str, remote_path: str) -> None:
        """Copy a local file to the machine over SFTP."""
        self._call(self._sftp("upload", local_path, remote_path))

    def download(self, remote_path: str, local_path: str) -> None:
        """Copy a file from the machine over SFTP."""
        self._call(self._sftp("download", remote_path, local_path))

    def close(self) -> None:
        """Close the connection; the next call reconnects."""
        if self._conn is not None:
            logger.info("Closing SSH connection")
            conn, self._conn = self._conn, None
            conn.close()
            self._call(conn.wait_closed())
        if self._host_resolver is not None:
            self._host = None

    def shutdown(self) -> None:
        """Close the connection and the event loop; the channel is unusable after."""
        if self._loop.is_closed():
            return
        self.close()
        self._loop.close()

    def __del__(self) -> None:
        loop = getattr(self, "_loop", None)
        if loop is not None and not loop.is_closed() and not loop.is_running():
            loop.close()
