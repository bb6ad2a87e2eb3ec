"""SSH availability probe."""

import logging

from rouster.models import Session

logger = logging.getLogger(__name__)


def is_reachable(session: Session) -> bool:
    """Check whether a remote command could currently succeed.

    Performs a fresh check through the channel on every call; nothing is
    cached.
    """
    reachable = session.channel.ready()
    logger.debug("[%s] SSH reachable: %s", session.name, reachable)
    return reachable
