import unittest
from unittest.mock import MagicMock
from kubebuddy.models.user_notifications import UserNotifications


class TestUserNotifications(unittest.TestCase):
    """
    Test class for UserNotifications
    """

    def test_default_handlers_do_nothing(self):
        """ Notifications before setup are silently dropped """
        notify = UserNotifications()
        notify.success("ok")
        notify.fail("ko")
        notify.info("info")
        notify.warning("warn")

    def test_setup_dispatches_to_handlers(self):
        """ Each notification kind goes to its handler """
        success, fail, info, warning = MagicMock(), MagicMock(), MagicMock(), MagicMock()
        notify = UserNotifications()
        notify.setup(success_msg=success, fail_msg=fail, info_msg=info, warning_msg=warning)

        notify.success("deployed")
        notify.fail("broken")
        notify.info("fyi")
        notify.warning("careful")

        success.assert_called_once_with("deployed")
        fail.assert_called_once_with("broken")
        info.assert_called_once_with("fyi")
        warning.assert_called_once_with("careful")

    def test_partial_setup(self):
        """ Handlers not given in setup are reset to no-ops """
        fail = MagicMock()
        notify = UserNotifications()
        notify.setup(fail_msg=fail)

        notify.success("ignored")
        notify.fail("shown")

        fail.assert_called_once_with("shown")
