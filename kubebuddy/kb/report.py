""" kb report command. """

import click
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text
from kubebuddy.capacity.aggregator import with_total_resources
from kubebuddy.capacity.report import build_capacity_report
from kubebuddy.kb.common import format_resources, load_snapshot, snapshot_option


@click.command(name='report')
@snapshot_option
@click.option('--json', 'json_output', is_flag=True, help="Output the report as JSON.")
def click_report(snapshot_file, json_output) -> None:
    """ Show allocated and available resources of all nodes. """
    snapshot = load_snapshot(snapshot_file)
    nodes = with_total_resources(snapshot.nodes, snapshot.components, snapshot.installed_components)
    report = build_capacity_report(nodes, snapshot.services, snapshot.assignments)

    if json_output:
        click.echo(report.model_dump_json(indent=2))
        return

    console = Console()
    console.print(
        f"Nodes: {report.total_nodes} ({report.active_nodes} active)  "
        f"Services: {report.total_services}  Assignments: {report.total_assignments}"
    )

    table = Table(title="Capacity Report", title_justify="left", box=box.HORIZONTALS, show_lines=True)
    table.add_column("Node", style="cyan", no_wrap=True)
    table.add_column("State")
    table.add_column("Utilization", justify="right")
    table.add_column("Allocated")
    table.add_column("Available")

    for entry in report.node_utilization:
        if entry.node.state == 'active':
            state = Text("ACTIVE", style="bold green")
        else:
            state = Text(entry.node.state.upper(), style="yellow")
        table.add_row(
            entry.node.id,
            state,
            f"{entry.utilization_pct:.0f}%",
            format_resources(entry.allocated),
            format_resources(entry.available),
        )
    console.print(table)
