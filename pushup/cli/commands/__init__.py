"""CLI commands for PushUP."""

from pushup.cli.commands.init import init_cmd
from pushup.cli.commands.add import add_cmd
from pushup.cli.commands.commit import commit_cmd
from pushup.cli.commands.log import log_cmd
from pushup.cli.commands.show import show_cmd
from pushup.cli.commands.status import status_cmd
from pushup.cli.commands.branch import branch_cmd, delete_branch_cmd
from pushup.cli.commands.checkout import checkout_cmd
from pushup.cli.commands.merge import merge_cmd
from pushup.cli.commands.reset import reset_cmd
from pushup.cli.commands.diff import diff_cmd
from pushup.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'log_cmd', 'show_cmd', 'status_cmd',
           'branch_cmd', 'delete_branch_cmd', 'checkout_cmd', 'merge_cmd', 'reset_cmd',
           'diff_cmd', 'config_cmd']
