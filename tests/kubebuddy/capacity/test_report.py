import unittest
from kubebuddy.capacity.report import build_capacity_report, node_utilization, resource_statistics
from kubebuddy.schemas.assignments import Assignment
from kubebuddy.schemas.nodes import Node
from kubebuddy.schemas.services import Service


WEB = Service(id='web', min_spec={'cpu': 1, 'ram': 2}, max_spec={'cpu': 2, 'ram': 4})
DB = Service(id='db', min_spec={'cpu': 1}, max_spec={'cpu': 3, 'ram': 2})
SERVICES = {'web': WEB, 'db': DB}


class TestResourceStatistics(unittest.TestCase):
    """
    Test class for resource_statistics
    """

    def test_statistics(self):
        """ min/max are sums, avg/median are over per assignment max specs """
        assignments = [Assignment(service_id='web', node_id='node-1', quantity=2),
                       Assignment(service_id='db', node_id='node-1')]

        stats = resource_statistics(assignments, SERVICES)

        self.assertEqual(stats.min, {'cpu': 3.0, 'ram': 4.0})
        self.assertEqual(stats.max, {'cpu': 7.0, 'ram': 10.0})
        self.assertEqual(stats.avg, {'cpu': 3.5, 'ram': 5.0})
        self.assertEqual(stats.median, {'cpu': 3.5, 'ram': 5.0})

    def test_median_odd_count(self):
        """ Median of an odd number of assignments is the middle value """
        services = {name: Service(id=name, max_spec={'cpu': cpu}) for name, cpu in (('a', 1), ('b', 5), ('c', 2))}
        assignments = [Assignment(service_id=name, node_id='n') for name in ('a', 'b', 'c')]

        stats = resource_statistics(assignments, services)

        self.assertEqual(stats.median, {'cpu': 2.0})
        self.assertAlmostEqual(stats.avg['cpu'], 8 / 3)

    def test_integral_sums_stay_integers(self):
        """ Integral min/max sums keep the integer type, fractional ones stay fractional """
        services = {
            'api': Service(id='api', min_spec={'cores': 2}, max_spec={'cores': 4, 'bandwidth_gbps': 0.5}),
        }
        assignments = [Assignment(service_id='api', node_id='n', quantity=2)]

        stats = resource_statistics(assignments, services)

        self.assertEqual(stats.max['cores'], 8)
        self.assertIsInstance(stats.max['cores'], int)
        self.assertIsInstance(stats.min['cores'], int)
        self.assertEqual(stats.max['bandwidth_gbps'], 1.0)
        self.assertIsInstance(stats.max['bandwidth_gbps'], float)
        self.assertIn('"max":{"cores":8,', stats.model_dump_json())

    def test_no_assignments(self):
        """ No statistics without assignments """
        self.assertIsNone(resource_statistics([], SERVICES))


class TestNodeUtilization(unittest.TestCase):
    """
    Test class for node_utilization
    """

    def test_node_utilization(self):
        """ Allocated, available and utilization of one node """
        node = Node(id='node-1', resources={'cpu': 8, 'ram': 16})
        assignments = [Assignment(service_id='web', node_id='node-1', quantity=2),
                       Assignment(service_id='db', node_id='node-1'),
                       Assignment(service_id='db', node_id='node-2')]

        entry = node_utilization(node, assignments, SERVICES)

        self.assertEqual(entry.total, {'cpu': 8, 'ram': 16})
        self.assertEqual(entry.allocated, {'cpu': 7, 'ram': 10})
        self.assertEqual(entry.available, {'cpu': 1, 'ram': 6})
        self.assertAlmostEqual(entry.utilization_pct, 75.0)
        self.assertEqual(entry.statistics.max, {'cpu': 7.0, 'ram': 10.0})

    def test_unused_resource_not_counted(self):
        """ A resource no assignment uses is reported as available but not averaged """
        node = Node(id='node-1', resources={'cpu': 8, 'ram': 16, 'nvme': 1000})
        assignments = [Assignment(service_id='web', node_id='node-1', quantity=2),
                       Assignment(service_id='db', node_id='node-1')]

        entry = node_utilization(node, assignments, SERVICES)

        self.assertAlmostEqual(entry.utilization_pct, 75.0)
        self.assertEqual(entry.available['nvme'], 1000)

    def test_idle_node(self):
        """ A node without assignments is fully available """
        node = Node(id='node-2', resources={'cpu': 4})
        entry = node_utilization(node, [], SERVICES)
        self.assertEqual(entry.allocated, {})
        self.assertEqual(entry.available, {'cpu': 4})
        self.assertEqual(entry.utilization_pct, 0.0)
        self.assertIsNone(entry.statistics)


class TestBuildCapacityReport(unittest.TestCase):
    """
    Test class for build_capacity_report
    """

    def test_report_totals(self):
        """ Report counts nodes, active nodes, services and assignments """
        nodes = [Node(id='node-1', resources={'cpu': 8, 'ram': 16}),
                 Node(id='node-2', state='maintenance', resources={'cpu': 4})]
        assignments = [Assignment(service_id='web', node_id='node-1', quantity=2),
                       Assignment(service_id='db', node_id='node-1')]

        report = build_capacity_report(nodes, [WEB, DB], assignments)

        self.assertEqual(report.total_nodes, 2)
        self.assertEqual(report.active_nodes, 1)
        self.assertEqual(report.total_services, 2)
        self.assertEqual(report.total_assignments, 2)
        self.assertEqual([entry.node.id for entry in report.node_utilization], ['node-1', 'node-2'])
        self.assertAlmostEqual(report.node_utilization[0].utilization_pct, 75.0)

    def test_empty_report(self):
        """ An empty snapshot yields an empty report """
        report = build_capacity_report([], [], [])
        self.assertEqual(report.total_nodes, 0)
        self.assertEqual(report.node_utilization, [])
