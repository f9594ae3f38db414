"""
User notifications for KubeBuddy.

Front ends (the ``kb`` command line, or any embedding application) decide how
messages reach the user by calling :meth:`UserNotifications.setup`. Until then
every notification is silently dropped.

Example:
    .. code-block:: python

        from kubebuddy.models.user_notifications import user_notify

        user_notify.setup(success_msg=print, fail_msg=print)
        user_notify.fail("Snapshot file is invalid")
"""

from typing import Callable, Optional


def _ignore(msg: str) -> None:
    pass


class UserNotifications:
    """ Dispatches success, failure, info and warning messages to configurable handlers. """

    def __init__(self) -> None:
        self.setup()

    def setup(self,
              success_msg: Optional[Callable[[str], None]] = None,
              fail_msg: Optional[Callable[[str], None]] = None,
              info_msg: Optional[Callable[[str], None]] = None,
              warning_msg: Optional[Callable[[str], None]] = None) -> None:
        """
        Configure the message handlers.

        Args:
            success_msg (Callable, optional): Handler for success messages.
            fail_msg (Callable, optional): Handler for failure messages.
            info_msg (Callable, optional): Handler for informational messages.
            warning_msg (Callable, optional): Handler for warnings.
        """
        self.success_msg = success_msg or _ignore
        self.fail_msg = fail_msg or _ignore
        self.info_msg = info_msg or _ignore
        self.warning_msg = warning_msg or _ignore

    def success(self, msg: str) -> None:
        self.success_msg(msg)

    def fail(self, msg: str) -> None:
        self.fail_msg(msg)

    def info(self, msg: str) -> None:
        self.info_msg(msg)

    def warning(self, msg: str) -> None:
        self.warning_msg(msg)


user_notify = UserNotifications()
