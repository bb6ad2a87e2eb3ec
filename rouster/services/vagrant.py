"""Machine lifecycle delegated to the vagrant command line tool."""

import logging
import os
from collections.abc import Callable
from pathlib import Path

from rouster.models import ExecutionResult
from rouster.utils.shell import quote_path

logger = logging.getLogger(__name__)

# Runs a shell command on the controlling host, raising on failure.
LocalRunner = Callable[[str], ExecutionResult]

INSECURE_PRIVATE_KEY = Path("~") / ".vagrant.d" / "insecure_private_key"


class VagrantEngine:
    """Lifecycle engine for machines defined in one Vagrantfile.

    Lifecycle commands go through ``runner``, so their output is recorded
    like any other local command. ``ssh_config`` is a lookup made on the
    channel's behalf and goes through ``query_runner`` when one is given.
    """

    def __init__(
        self,
        vagrantfile: str,
        runner: LocalRunner,
        query_runner: LocalRunner | None = None,
    ) -> None:
        self.vagrantfile = vagrantfile
        self.project_dir = os.path.dirname(os.path.abspath(vagrantfile))
        self._runner = runner
        self._query_runner = query_runner or runner

    def _command(self, *args: str) -> str:
        argv = " ".join(quote_path(arg) for arg in args)
        return f"cd {quote_path(self.project_dir)} && vagrant {argv}"

    def _vagrant(self, *args: str) -> str:
        return self._runner(self._command(*args)).output

    def up(self, name: str) -> None:
        logger.info("vagrant up %s", name)
        self._vagrant("up", name)

    def destroy(self, name: str) -> None:
        logger.info("vagrant destroy %s", name)
        self._vagrant("destroy", "--force", name)

    def suspend(self, name: str) -> None:
        logger.info("vagrant suspend %s", name)
        self._vagrant("suspend", name)

    def status(self, name: str) -> str:
        """Return the machine state, e.g. "running" or "not_created".

        Parses the ``state`` row of ``vagrant status --machine-readable``.
        """
        output = self._vagrant("status", name, "--machine-readable")
        for line in output.splitlines():
            fields = line.split(",")
            if len(fields) >= 4 and fields[1] == name and fields[2] == "state":
                return fields[3]
        return "unknown"

    def ssh_config(self, name: str) -> str:
        return self._query_runner(self._command("ssh-config", name)).output

    def default_private_key_path(self) -> str:
        return os.path.expanduser(str(INSECURE_PRIVATE_KEY))
