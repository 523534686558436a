"""Selection of sessions to log off."""

from collections.abc import Iterable

from rdsjanitor.models.session import Session


def select_sessions_for_logoff(
    sessions: Iterable[Session],
    users: Iterable[str] | None = None,
    all_sessions: bool = False,
) -> list[Session]:
    """Pick the disconnected sessions that should be logged off.

    Only disconnected sessions are ever selected. When ``users`` is given
    and non-empty, the selection is narrowed to exact (case-sensitive)
    username matches. Otherwise every disconnected session is selected.

    Args:
        sessions: Session snapshot.
        users: Optional usernames to restrict the selection to.
        all_sessions: Mirrors the ``--all`` flag. Has no effect on the result:
            selecting every disconnected session is already the default, and
            a non-empty ``users`` still narrows the selection when it is set.

    Returns:
        Selected sessions in snapshot order (possibly empty).
    """
    disconnected = [s for s in sessions if s.is_disconnected]

    wanted = set(users) if users is not None else set()
    if not wanted:
        return disconnected

    return [s for s in disconnected if s.username in wanted]
