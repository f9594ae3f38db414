""" kb node ls command. """

import click
from rich import box
from rich.console import Console
from rich.table import Table
from kubebuddy.capacity.aggregator import with_total_resources
from kubebuddy.capacity.diagnostics import AggregationDiagnostics
from kubebuddy.kb.common import format_resources, load_snapshot, snapshot_option


@click.command(name='ls')
@snapshot_option
@click.option('--diagnostics', 'show_diagnostics', is_flag=True,
              help="Also list hardware records that could not be aggregated.")
def click_ls(snapshot_file, show_diagnostics) -> None:
    """ List nodes with their total resources derived from installed hardware. """
    snapshot = load_snapshot(snapshot_file)
    diagnostics = AggregationDiagnostics()
    nodes = with_total_resources(snapshot.nodes, snapshot.components, snapshot.installed_components, diagnostics)
    console = Console()

    table = Table(title="Nodes", title_justify="left", box=box.HORIZONTALS)
    table.add_column("Node", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Provider")
    table.add_column("Region")
    table.add_column("State")
    table.add_column("Resources")
    for node in nodes:
        table.add_row(node.id, node.type, node.provider, node.region, node.state, format_resources(node.resources))
    console.print(table)

    if show_diagnostics:
        if not len(diagnostics):
            console.print("No hardware diagnostics.")
        for warning in diagnostics:
            console.print(str(warning), style="yellow", markup=False)
