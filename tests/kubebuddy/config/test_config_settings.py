import unittest
import kubebuddy.config as config


class TestConfigSettings(unittest.TestCase):
    """
    Test the settings loaded from the packaged kubebuddy.yml
    """

    def test_target_utilization(self):
        """ Default target utilization is 65% """
        self.assertEqual(config.TARGET_UTILIZATION, 0.65)

    def test_default_node_type(self):
        """ Default recommended node type is baremetal """
        self.assertEqual(config.DEFAULT_NODE_TYPE, "baremetal")

    def test_hardware_fields_default_file(self):
        """ Packaged hardware field table is shipped next to the configuration """
        self.assertTrue(config.HARDWARE_FIELDS_DEFAULT_FILE.endswith("hardware_fields.yml"))

    def test_notification_colors(self):
        """ Terminal colour codes are defined """
        self.assertEqual(config.KB_END, "\x1b[0m")
        self.assertTrue(config.KB_FAIL.startswith("\x1b["))
