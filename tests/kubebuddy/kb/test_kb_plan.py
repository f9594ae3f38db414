import json
import os
import unittest
from click.testing import CliRunner
from kubebuddy.kb.plan import click_plan


SNAPSHOT = os.path.join(os.path.dirname(__file__), 'fixtures', 'snapshot.yml')


class TestClickPlanCommand(unittest.TestCase):
    """
    Unit tests for kb.plan.click_plan command
    """

    def setUp(self):
        self.runner = CliRunner()

    def test_feasible_plan(self):
        """ Feasible plans list the candidates """
        result = self.runner.invoke(click_plan, ['web', '--snapshot', SNAPSHOT])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("Capacity Planning: Web frontend", result.output)
        self.assertIn("Feasible - found 1 candidate(s)", result.output)
        self.assertIn("node-1", result.output)
        self.assertIn("90.0", result.output)
        self.assertNotIn("node-2", result.output)

    def test_infeasible_plan(self):
        """ Infeasible plans show purchase recommendations """
        result = self.runner.invoke(click_plan, ['big', '-s', SNAPSHOT])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("Not feasible", result.output)
        self.assertIn("Recommendations", result.output)
        self.assertIn("baremetal", result.output)
        self.assertIn("cores=128", result.output)

    def test_json_output(self):
        """ --json prints the plan result """
        result = self.runner.invoke(click_plan, ['web', '--snapshot', SNAPSHOT, '--json'])

        self.assertEqual(result.exit_code, 0)
        plan = json.loads(result.output)
        self.assertTrue(plan['feasible'])
        self.assertEqual(plan['candidates'][0]['node']['id'], 'node-1')
        self.assertEqual(plan['candidates'][0]['available_after'], {'cores': 2, 'memory': 4096})
        self.assertAlmostEqual(plan['candidates'][0]['utilization_after'], 0.75)

    def test_constraints(self):
        """ Constraints options filter the nodes """
        result = self.runner.invoke(click_plan, ['web', '-s', SNAPSHOT, '--region', 'us-east', '--json'])

        self.assertEqual(result.exit_code, 0)
        self.assertFalse(json.loads(result.output)['feasible'])

    def test_tag_constraint(self):
        """ --tag requires node tags """
        result = self.runner.invoke(click_plan, ['web', '-s', SNAPSHOT, '--tag', 'env=prod', '--json'])
        self.assertTrue(json.loads(result.output)['feasible'])

        result = self.runner.invoke(click_plan, ['web', '-s', SNAPSHOT, '--tag', 'env=dev', '--json'])
        self.assertFalse(json.loads(result.output)['feasible'])

    def test_min_buffer(self):
        """ --min-buffer drops nodes left too full """
        result = self.runner.invoke(click_plan, ['web', '-s', SNAPSHOT, '--min-buffer', '0.3', '--json'])
        self.assertFalse(json.loads(result.output)['feasible'])

    def test_unknown_service(self):
        """ Unknown services exit with status 1 """
        result = self.runner.invoke(click_plan, ['ghost', '--snapshot', SNAPSHOT])
        self.assertEqual(result.exit_code, 1)

    def test_invalid_min_buffer(self):
        """ Out of range buffers exit with status 1 """
        result = self.runner.invoke(click_plan, ['web', '-s', SNAPSHOT, '--min-buffer', '1.5'])
        self.assertEqual(result.exit_code, 1)

    def test_invalid_tag(self):
        """ Malformed tags are usage errors """
        result = self.runner.invoke(click_plan, ['web', '-s', SNAPSHOT, '--tag', 'prod'])
        self.assertEqual(result.exit_code, 2)

    def test_invalid_snapshot(self):
        """ Invalid snapshot files exit with status 1 """
        with self.runner.isolated_filesystem():
            with open('snapshot.yml', 'w') as f:
                f.write("nodes:\n  - name: missing id\n")
            result = self.runner.invoke(click_plan, ['web', '-s', 'snapshot.yml'])
        self.assertEqual(result.exit_code, 1)

    def test_missing_snapshot_file(self):
        """ A missing snapshot file is a usage error """
        result = self.runner.invoke(click_plan, ['web', '-s', 'does-not-exist.yml'])
        self.assertEqual(result.exit_code, 2)
