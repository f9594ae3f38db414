import os
import unittest
from kubebuddy.config import expandvars_with_defaults


class TestExpandVarsWithDefaults(unittest.TestCase):
    """
    Test cases for environment variable expansion in KubeBuddy configuration files
    """

    def setUp(self):
        """ Start each test from an empty environment """
        self._saved_environ = os.environ.copy()
        os.environ.clear()

    def tearDown(self):
        """ Restore the environment """
        os.environ.clear()
        os.environ.update(self._saved_environ)

    def test_variable_set(self):
        """ ${VAR} takes the value of VAR """
        os.environ["KUBEBUDDY_SNAPSHOT"] = "/srv/kb/snapshot.yml"
        self.assertEqual(expandvars_with_defaults("snapshot: ${KUBEBUDDY_SNAPSHOT}"),
                         "snapshot: /srv/kb/snapshot.yml")

    def test_variable_unset(self):
        """ ${VAR} of an unset variable expands to nothing """
        self.assertEqual(expandvars_with_defaults("snapshot: ${KUBEBUDDY_SNAPSHOT}"), "snapshot: ")

    def test_default_not_used_when_set(self):
        """ ${VAR:-default} prefers the variable """
        os.environ["KUBEBUDDY_LOG_LEVEL"] = "DEBUG"
        self.assertEqual(expandvars_with_defaults("${KUBEBUDDY_LOG_LEVEL:-WARNING}"), "DEBUG")

    def test_default_used_when_unset(self):
        """ ${VAR:-default} falls back to the default """
        self.assertEqual(expandvars_with_defaults("${KUBEBUDDY_LOG_LEVEL:-WARNING}"), "WARNING")

    def test_default_used_when_empty(self):
        """ A variable set to an empty string takes the default """
        os.environ["KUBEBUDDY_LOG_LEVEL"] = ""
        self.assertEqual(expandvars_with_defaults("${KUBEBUDDY_LOG_LEVEL:-WARNING}"), "WARNING")

    def test_empty_default(self):
        """ ${VAR:-} of an unset variable expands to nothing """
        self.assertEqual(expandvars_with_defaults("fields: '${KUBEBUDDY_HARDWARE_FIELDS:-}'"), "fields: ''")

    def test_several_variables(self):
        """ Every reference in the text is expanded """
        os.environ["KB_PROVIDER"] = "ovh"
        os.environ["KB_REGION"] = "eu-west"
        text = "${KB_PROVIDER}/${KB_REGION}/${KB_RACK:-r1}"
        self.assertEqual(expandvars_with_defaults(text), "ovh/eu-west/r1")

    def test_default_with_path(self):
        """ Defaults may contain slashes and dots """
        self.assertEqual(expandvars_with_defaults("${KB_FIELDS:-/etc/kubebuddy/fields.yml}"),
                         "/etc/kubebuddy/fields.yml")

    def test_plain_text(self):
        """ Text without references is returned unchanged """
        self.assertEqual(expandvars_with_defaults("TARGET_UTILIZATION: 0.65"), "TARGET_UTILIZATION: 0.65")

    def test_dollar_without_braces(self):
        """ $VAR without braces is not expanded """
        os.environ["KB_REGION"] = "eu-west"
        self.assertEqual(expandvars_with_defaults("region: $KB_REGION"), "region: $KB_REGION")
