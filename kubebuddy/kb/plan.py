""" kb plan command. """

import sys
import click
from rich import box
from rich.console import Console
from rich.table import Table
from kubebuddy.capacity.planner import CapacityPlanner, SERVICE_NOT_FOUND
from kubebuddy.exceptions import InvalidInputError
from kubebuddy.kb.common import format_resources, load_snapshot, parse_tags, snapshot_option
from kubebuddy.models.user_notifications import user_notify


@click.command(name='plan')
@click.argument('service_id')
@snapshot_option
@click.option('--node', 'node_id', default=None, help="Only evaluate this node (placement rules are skipped).")
@click.option('--provider', default=None, help="Only consider nodes of this provider.")
@click.option('--region', default=None, help="Only consider nodes in this region.")
@click.option('--tag', 'tags', multiple=True, help="Required node tag as key=value (repeatable).")
@click.option('--min-buffer', type=float, default=0.0, show_default=True,
              help="Fraction of resources (0.0-1.0) to keep free after placement.")
@click.option('--json', 'json_output', is_flag=True, help="Output the plan as JSON.")
def click_plan(service_id, snapshot_file, node_id, provider, region, tags, min_buffer, json_output) -> None:
    """ Plan capacity for a service. """
    snapshot = load_snapshot(snapshot_file)
    planner = CapacityPlanner.from_snapshot(snapshot)

    request = {
        'service_id': service_id,
        'constraints': {
            'node_id': node_id,
            'provider': provider,
            'region': region,
            'tags': parse_tags(tags),
            'min_buffer': min_buffer,
        }
    }
    try:
        result = planner.plan(request)
    except InvalidInputError as err:
        user_notify.fail(str(err))
        sys.exit(1)

    if json_output:
        click.echo(result.model_dump_json(indent=2))
        return

    if result.message == SERVICE_NOT_FOUND:
        user_notify.fail(f"Service '{service_id}' not found")
        sys.exit(1)

    console = Console()
    service = planner.services_by_id[service_id]
    console.print(f"Capacity Planning: {service.name or service.id}")

    if result.feasible:
        console.print(f"Feasible - found {len(result.candidates)} candidate(s)", style="bold green")
        table = Table(title="Candidates", title_justify="left", box=box.HORIZONTALS)
        table.add_column("#", justify="right")
        table.add_column("Node", style="cyan", no_wrap=True)
        table.add_column("Provider")
        table.add_column("Region")
        table.add_column("Score", justify="right")
        table.add_column("Utilization after", justify="right")
        table.add_column("Available after")
        for rank, candidate in enumerate(result.candidates, start=1):
            table.add_row(
                str(rank),
                candidate.node.id,
                candidate.node.provider,
                candidate.node.region,
                f"{candidate.score:.1f}",
                f"{candidate.utilization_after * 100:.0f}%",
                format_resources(candidate.available_after),
            )
        console.print(table)
        return

    console.print(f"Not feasible - {result.message}", style="bold red")
    table = Table(title="Recommendations", title_justify="left", box=box.HORIZONTALS)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Quantity", justify="right")
    table.add_column("Spec")
    table.add_column("Rationale")
    for recommendation in result.recommendations:
        table.add_row(
            recommendation.type,
            str(recommendation.quantity),
            format_resources(recommendation.spec),
            recommendation.rationale,
        )
    console.print(table)
