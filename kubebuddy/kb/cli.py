""" kb command line groups. """

import click
import kubebuddy
from kubebuddy.kb.node.ls import click_ls
from kubebuddy.kb.plan import click_plan
from kubebuddy.kb.report import click_report


@click.group()
def cli():
    """ KubeBuddy capacity planning command line interface. """
    pass


@cli.group()
def node():
    """ Inspect nodes. """
    pass


@cli.command(name='version')
def version():
    """ Show the KubeBuddy version. """
    click.echo(f"KubeBuddy {kubebuddy.__version__}")


cli.add_command(click_plan)
cli.add_command(click_report)
node.add_command(click_ls)
