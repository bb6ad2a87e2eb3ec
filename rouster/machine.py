"""Rouster: one managed machine and everything you can do to it.

This is the session construction layer. It resolves settings, discovers the
Vagrantfile, picks the SSH key, builds the channel and then hands every
operation to the services, which do the actual work.
"""

import logging
import os

from rouster.channels.ssh import SSHChannel
from rouster.config import (
    HostKeyVerifier,
    Settings,
    SSHConfigParser,
    check_key_permissions,
    find_vagrantfile,
    resolve_key,
)
from rouster.errors import InternalError, RemoteExecutionError
from rouster.logs import level_for_verbosity
from rouster.models import (
    ExecutionResult,
    FileMetadata,
    OutputLog,
    Session,
    SessionHandle,
    SSHHost,
)
from rouster.protocols import Channel, MachineEngine
from rouster.services import (
    VagrantEngine,
    fetch,
    is_reachable,
    run_local,
    run_remote,
    send,
)
from rouster.utils.listing import parse_listing
from rouster.utils.shell import quote_path

VAGRANTFILE_SEARCH_LEVELS = 5
RESTART_COMMAND = "/sbin/shutdown -rf now"


class Rouster:
    """A managed machine for integration tests.

    Example:
        >>> app = Rouster("app")
        >>> app.up()
        >>> app.run("rpm -q httpd")
        'httpd-2.2.15-26.el6.x86_64\\n'
        >>> app.file("/etc/httpd/conf/httpd.conf").mode
        '0644'
    """

    def __init__(
        self,
        name: str,
        *,
        channel: Channel | None = None,
        engine: MachineEngine | None = None,
        host: SSHHost | None = None,
        passthrough: bool | None = None,
        sudo: bool | None = None,
        sshkey: str | None = None,
        vagrantfile: str | None = None,
        verbosity: int | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Build the session for one machine.

        Args:
            name: Machine name, as known to the engine
            channel: Channel to use instead of building an SSHChannel
            engine: Lifecycle engine (default: VagrantEngine)
            host: SSH endpoint; required for passthrough hosts unless a
                channel is given
            passthrough: Machine is not lifecycle-managed (default: settings)
            sudo: Run remote commands through sudo (default: not passthrough)
            sshkey: Private key path (default: settings, then engine default)
            vagrantfile: Vagrantfile path (default: settings, then search up
                from the current directory)
            verbosity: 1 (debug) .. 5 (fatal only) for this machine's logger
            settings: Settings to fall back on (default: from environment)

        Raises:
            InternalError: If the Vagrantfile, key, known_hosts, or host cannot
                be resolved
        """
        self.settings = settings if settings is not None else Settings.from_env()
        if passthrough is None:
            passthrough = self.settings.passthrough
        if sudo is None:
            sudo = self.settings.sudo
        if not isinstance(verbosity, int):
            verbosity = self.settings.verbosity

        self.log = logging.getLogger(f"rouster.machine.{name}")
        self.log.setLevel(level_for_verbosity(verbosity))

        self.vagrantfile: str | None = None
        self.engine: MachineEngine | None = None
        if not passthrough:
            self.engine = engine if engine is not None else self._vagrant_engine(vagrantfile)

        default_key = self.engine.default_private_key_path() if self.engine else None
        sshkey = resolve_key(sshkey or self.settings.sshkey, passthrough, default_key)

        self.handle = SessionHandle.create(
            name,
            passthrough=passthrough,
            sudo=sudo,
            sshkey=sshkey,
            verbosity=verbosity,
        )

        if channel is None:
            channel = self._ssh_channel(host)

        self.session = Session(handle=self.handle, channel=channel)
        self.log.debug("Rouster object successfully instantiated")

    def _vagrant_engine(self, vagrantfile: str | None) -> VagrantEngine:
        vagrantfile = (
            vagrantfile
            or self.settings.vagrantfile
            or find_vagrantfile(levels=VAGRANTFILE_SEARCH_LEVELS)
        )
        if not vagrantfile or not os.path.isfile(vagrantfile):
            raise InternalError(f"specified Vagrantfile [{vagrantfile}] does not exist")
        self.vagrantfile = vagrantfile
        return VagrantEngine(
            vagrantfile,
            runner=self._run_for_engine,
            query_runner=self._query_for_engine,
        )

    def _run_for_engine(self, command: str) -> ExecutionResult:
        return run_local(self.session, command, tmp_dir=self.settings.tmp_dir)

    def _query_for_engine(self, command: str) -> ExecutionResult:
        # Scratch session: lookups must not show up in output or exitcode
        scratch = Session(handle=self.handle, channel=self.session.channel)
        return run_local(scratch, command, tmp_dir=self.settings.tmp_dir)

    def _ssh_channel(self, host: SSHHost | None) -> SSHChannel:
        sshkey = self.handle.sshkey
        if sshkey is None:
            raise InternalError("no sshkey specified and none could be determined")
        check_key_permissions(sshkey)

        try:
            known_hosts = HostKeyVerifier(
                known_hosts_path=self.settings.known_hosts,
                strict_checking=self.settings.strict_host_key_checking,
            ).get_known_hosts_path()
        except FileNotFoundError as e:
            raise InternalError(str(e)) from e
        options = {
            "client_keys": [sshkey],
            "known_hosts": known_hosts,
            "strict_host_key_checking": self.settings.strict_host_key_checking,
            "connect_timeout": self.settings.connect_timeout,
        }

        if host is not None:
            return SSHChannel(host, **options)
        if self.handle.passthrough:
            raise InternalError("must specify host or channel when using a passthrough host")
        return SSHChannel(host_resolver=self._resolve_ssh_host, **options)

    def _resolve_ssh_host(self) -> SSHHost:
        engine = self._require_engine()
        hosts = SSHConfigParser().parse(engine.ssh_config(self.name))
        host = hosts.get(self.name) or next(iter(hosts.values()), None)
        if host is None:
            raise InternalError(f"no SSH configuration reported for [{self.name}]")
        self.log.debug("resolved SSH endpoint %s", host.address)
        return host

    def _require_engine(self) -> MachineEngine:
        if self.engine is None:
            raise InternalError(f"[{self.name}] is a passthrough host, not lifecycle-managed")
        return self.engine

    def __repr__(self) -> str:
        return (
            f"Rouster(name={self.name!r}, passthrough={self.handle.passthrough}, "
            f"sshkey={self.handle.sshkey!r}, sudo={self.handle.sudo}, "
            f"vagrantfile={self.vagrantfile!r}, verbosity={self.handle.verbosity})"
        )

    @property
    def name(self) -> str:
        return self.handle.name

    @property
    def channel(self) -> Channel:
        return self.session.channel

    @property
    def output(self) -> OutputLog:
        return self.session.output

    @property
    def exitcode(self) -> int | None:
        """Exit code of the last successful command."""
        return self.session.last_exit_code

    def uses_sudo(self) -> bool:
        return self.handle.sudo

    def is_passthrough(self) -> bool:
        return self.handle.passthrough

    # Lifecycle

    def up(self) -> None:
        """Boot the machine, reconnecting SSH afterwards."""
        self.log.info("up()")
        self.channel.close()
        self._require_engine().up(self.name)

    def destroy(self) -> None:
        self.log.info("destroy()")
        self._require_engine().destroy(self.name)
        self.channel.close()

    def suspend(self) -> None:
        self.log.info("suspend()")
        self._require_engine().suspend(self.name)
        self.channel.close()

    def status(self) -> str:
        return self._require_engine().status(self.name)

    def rebuild(self) -> None:
        """Destroy and bring the machine back up."""
        self.log.debug("rebuild()")
        self.destroy()
        self.up()

    def restart(self) -> None:
        """Reboot the machine from the inside."""
        self.log.debug("restart()")
        self.run(RESTART_COMMAND)
        self.channel.close()

    # Commands

    def run(self, command: str) -> str:
        """Run a command on the machine and return its output.

        Raises:
            RemoteExecutionError: If the command exits non-zero
        """
        return run_remote(self.session, command).output

    def run_local(self, command: str) -> str:
        """Run a command on the controlling host and return its output.

        Raises:
            LocalExecutionError: If the command exits non-zero
        """
        return run_local(self.session, command, tmp_dir=self.settings.tmp_dir).output

    def get_output(self, index: int = 0) -> str | None:
        """Return the output of the command ``index`` runs ago."""
        return self.output.get(index)

    def is_available_via_ssh(self) -> bool:
        return is_reachable(self.session)

    # Transfers

    def get(self, remote_file: str, local_file: str | None = None) -> None:
        """Download a file from the machine."""
        fetch(self.session, remote_file, local_file)

    def put(self, local_file: str, remote_file: str | None = None) -> None:
        """Upload a file to the machine."""
        send(self.session, local_file, remote_file)

    # File inspection

    def file(self, path: str) -> FileMetadata | None:
        """Describe a remote file or directory from its ``ls -ld`` line.

        Returns:
            FileMetadata, or None if the path cannot be listed
        """
        try:
            output = self.run(f"ls -ld {quote_path(path)}")
        except RemoteExecutionError as e:
            self.log.debug("unable to list [%s]: %s", path, e)
            return None

        lines = output.strip().splitlines()
        if not lines:
            return None
        return parse_listing(lines[0])

    def is_file(self, path: str) -> bool:
        metadata = self.file(path)
        return metadata is not None and metadata.is_file

    def is_dir(self, path: str) -> bool:
        metadata = self.file(path)
        return metadata is not None and metadata.is_directory
