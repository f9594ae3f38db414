"""
KubeBuddy Command Line Interface.

Usage: kb [OPTIONS] COMMAND [ARGS]...
Help: kb --help


Becomes available after installing KubeBuddy (after cloning the repository locally) like

> pip install .

or (during development)

> pip install -e .
"""

from kubebuddy.kb.cli import cli
from kubebuddy.models.user_notifications import user_notify
import kubebuddy.config as Config


def init_environment() -> None:
    """ Setup KubeBuddy user notifications for terminal output. """
    user_notify.setup(
        success_msg=lambda msg: print(f"{Config.KB_SUCCESS}{msg}{Config.KB_END}"),
        fail_msg=lambda msg: print(f"{Config.KB_FAIL}{msg}{Config.KB_END}"),
        info_msg=print,
        warning_msg=lambda msg: print(f"{Config.KB_WARNING}{msg}{Config.KB_END}")
    )


def main():
    """ Command line interface of KubeBuddy. """
    init_environment()
    cli()


if __name__ == '__main__':
    main()
