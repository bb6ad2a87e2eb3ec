"""Configuration module for Rouster.

- Settings: Environment variable configuration
- SSHConfigParser: Parses ssh_config / `vagrant ssh-config` output
- HostKeyVerifier: Manages SSH host key verification
- Key and Vagrantfile helpers used while building a machine session
"""

from rouster.config.host_keys import HostKeyVerifier
from rouster.config.keys import check_key_permissions, resolve_key
from rouster.config.parser import SSHConfigParser
from rouster.config.settings import Settings
from rouster.config.vagrantfile import find_vagrantfile

__all__ = [
    "HostKeyVerifier",
    "Settings",
    "SSHConfigParser",
    "check_key_permissions",
    "find_vagrantfile",
    "resolve_key",
]
