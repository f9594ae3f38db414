""" Helpers shared by the kb commands. """

import sys
import click
from typing import Dict, Mapping, Tuple
import kubebuddy.config as config
from kubebuddy.exceptions import InvalidInputError
from kubebuddy.models.user_notifications import user_notify
from kubebuddy.schemas.snapshot import Snapshot, get_snapshot_from_config_file


snapshot_option = click.option(
    '--snapshot', '-s', 'snapshot_file',
    type=click.Path(exists=True, dir_okay=False),
    default=lambda: config.KUBEBUDDY_SNAPSHOT or None,
    required=True,
    help="YAML or JSON snapshot of nodes, components, services and assignments "
         "(defaults to $KUBEBUDDY_SNAPSHOT)."
)


def load_snapshot(snapshot_file: str) -> Snapshot:
    """
    Load a snapshot file, exiting with status 1 if it is invalid.

    Args:
        snapshot_file (str): Path to the snapshot file.

    Returns:
        Snapshot: Validated snapshot.
    """
    try:
        return get_snapshot_from_config_file(snapshot_file)
    except InvalidInputError as err:
        user_notify.fail(str(err))
        sys.exit(1)


def parse_tags(tags: Tuple[str, ...]) -> Dict[str, str]:
    """
    Parse ``key=value`` tag options.

    Raises:
        click.BadParameter: If a tag is not of the form key=value.
    """
    parsed = {}
    for tag in tags:
        key, sep, value = tag.partition('=')
        if not sep or not key.strip():
            raise click.BadParameter(f"'{tag}' is not of the form key=value", param_hint="--tag")
        parsed[key.strip()] = value.strip()
    return parsed


def format_resources(resources: Mapping[str, float]) -> str:
    """ Render a resource vector as ``key=value`` pairs sorted by key. """
    if not resources:
        return "-"
    return ", ".join(f"{key}={_format_number(value)}" for key, value in sorted(resources.items()))


def _format_number(value) -> str:
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.2f}"
    return str(int(value))
