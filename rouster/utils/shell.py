"""Shell command safety utilities."""

import shlex


def quote_path(path: str) -> str:
    """Safely quote a path for shell commands.

    Args:
        path: File system path to quote

    Returns:
        Shell-safe quoted path
    """
    return shlex.quote(path)


def sudo_wrap(command: str) -> str:
    """Wrap a command so it runs under a non-interactive root shell.

    Args:
        command: Command line to run as root

    Returns:
        Command line invoking sudo
    """
    return f"sudo -H -n sh -c {shlex.quote(command)}"
