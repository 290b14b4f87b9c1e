"""
CLI interface for gitshadow.
"""

import sys
import argparse
import logging
from typing import Optional, List

from . import __version__
from .config import load_configuration, configure_logging
from .core import Shadow, ShadowError
from .commands import (
    add, checkout, diff, gc, hooks, init, log, ls, pull, push, remote, remove,
    restore, save, status, sync
)


logger = logging.getLogger('gitshadow.cli')


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='shadow',
        description='Keep branch-specific untracked files in a shadow Git repository'
    )

    # Add global options
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    # Add subcommands
    subparsers = parser.add_subparsers(dest='command', metavar='<command>', help='Available commands')

    # Setup
    subparsers.add_parser('init', help='Initialize shadow for current repo')
    subparsers.add_parser('install-hooks', help='Auto save/restore on branch switch')
    subparsers.add_parser('uninstall-hooks', help='Remove hooks')

    # Core
    add_parser = subparsers.add_parser('add', help='Track files or directories')
    add_parser.add_argument('paths', nargs='+', help='Files or directories to track')

    remove_parser = subparsers.add_parser('remove', aliases=['rm'], help='Untrack a file')
    remove_parser.add_argument('path', help='File to untrack')

    save_parser = subparsers.add_parser('save', help='Save tracked files')
    save_parser.add_argument('message', nargs='*', help='Commit message')

    subparsers.add_parser('restore', help='Restore tracked files')
    subparsers.add_parser('status', aliases=['st'], help='Show file status')

    # Branch
    ls_parser = subparsers.add_parser('ls', help='List files or branches')
    ls_parser.add_argument('--branches', action='store_true', help='List shadow branches')

    diff_parser = subparsers.add_parser('diff', help='Show differences')
    diff_parser.add_argument('first', nargs='?', help='First branch')
    diff_parser.add_argument('second', nargs='?', help='Second branch')

    sync_parser = subparsers.add_parser('sync', help='Sync from branch (default: main)')
    sync_parser.add_argument('branch', nargs='?', help='Branch to take files from')

    # History
    log_parser = subparsers.add_parser('log', help='Show commit history')
    log_parser.add_argument('file', nargs='?', help='Limit history to a file')
    log_parser.add_argument('count', nargs='?', type=int, help='Number of commits (default: 10)')

    checkout_parser = subparsers.add_parser('checkout', aliases=['co'], help='Restore version')
    checkout_parser.add_argument('ref', help='Shadow revision')
    checkout_parser.add_argument('file', nargs='?', help='Restore only this file')

    # Remote
    remote_parser = subparsers.add_parser('remote', help='Manage remotes')
    remote_subparsers = remote_parser.add_subparsers(dest='remote_command')

    remote_add_parser = remote_subparsers.add_parser('add', help='Add remote')
    remote_add_parser.add_argument('name', help='Remote name')
    remote_add_parser.add_argument('url', help='Remote URL')

    remote_remove_parser = remote_subparsers.add_parser('remove', help='Remove remote')
    remote_remove_parser.add_argument('name', help='Remote name')

    remote_subparsers.add_parser('list', help='List remotes')

    push_parser = subparsers.add_parser('push', help='Push to remote')
    push_parser.add_argument('remote', nargs='?', help='Remote name (default: origin)')

    pull_parser = subparsers.add_parser('pull', help='Pull from remote')
    pull_parser.add_argument('remote', nargs='?', help='Remote name (default: origin)')

    # Maintenance
    subparsers.add_parser('gc', help='Garbage collect')

    return parser


def handle_init(shadow: Shadow, args) -> int:
    return init.init_shadow(shadow)


def handle_add(shadow: Shadow, args) -> int:
    return add.add_files(shadow, args.paths)


def handle_remove(shadow: Shadow, args) -> int:
    return remove.remove_file(shadow, args.path)


def handle_save(shadow: Shadow, args) -> int:
    return save.save_files(shadow, ' '.join(args.message) or None)


def handle_restore(shadow: Shadow, args) -> int:
    return restore.restore_files(shadow)


def handle_status(shadow: Shadow, args) -> int:
    return status.show_status(shadow)


def handle_ls(shadow: Shadow, args) -> int:
    return ls.list_files(shadow, args.branches)


def handle_diff(shadow: Shadow, args) -> int:
    return diff.show_diff(shadow, args.first, args.second)


def handle_log(shadow: Shadow, args) -> int:
    return log.show_log(shadow, args.file, args.count or shadow.config.log_count)


def handle_sync(shadow: Shadow, args) -> int:
    return sync.sync_from(shadow, args.branch or shadow.config.default_branch)


def handle_checkout(shadow: Shadow, args) -> int:
    return checkout.checkout_ref(shadow, args.ref, args.file)


def handle_push(shadow: Shadow, args) -> int:
    return push.push_branches(shadow, args.remote or shadow.config.default_remote)


def handle_pull(shadow: Shadow, args) -> int:
    return pull.pull_branch(shadow, args.remote or shadow.config.default_remote)


def handle_remote(shadow: Shadow, args) -> int:
    """Handle remote subcommands."""
    if args.remote_command == 'add':
        return remote.add_remote(shadow, args.name, args.url)
    elif args.remote_command == 'remove':
        return remote.remove_remote(shadow, args.name)
    else:
        return remote.list_remotes(shadow)


def handle_gc(shadow: Shadow, args) -> int:
    return gc.collect_garbage(shadow)


def handle_install_hooks(shadow: Shadow, args) -> int:
    return hooks.install_hooks(shadow)


def handle_uninstall_hooks(shadow: Shadow, args) -> int:
    return hooks.uninstall_hooks(shadow)


COMMAND_HANDLERS = {
    'init': handle_init,
    'add': handle_add,
    'remove': handle_remove,
    'rm': handle_remove,
    'save': handle_save,
    'restore': handle_restore,
    'status': handle_status,
    'st': handle_status,
    'ls': handle_ls,
    'diff': handle_diff,
    'log': handle_log,
    'sync': handle_sync,
    'checkout': handle_checkout,
    'co': handle_checkout,
    'push': handle_push,
    'pull': handle_pull,
    'remote': handle_remote,
    'gc': handle_gc,
    'install-hooks': handle_install_hooks,
    'uninstall-hooks': handle_uninstall_hooks,
}

# Commands that work before the shadow repository exists
NO_STORAGE_COMMANDS = {'init', 'install-hooks', 'uninstall-hooks'}


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()

    # argparse would reject unknown commands with exit status 2 on stderr
    command = next((arg for arg in args if not arg.startswith('-')), None)
    if command not in COMMAND_HANDLERS and not {'-h', '--help', '--version'} & set(args):
        parser.print_help()
        return 1

    parsed_args = parser.parse_args(args)

    try:
        config = load_configuration()
        configure_logging(config, parsed_args.verbose)

        shadow = Shadow.open(config)
        if parsed_args.command not in NO_STORAGE_COMMANDS:
            shadow.storage.require()

        logger.debug("Running %s in %s", parsed_args.command, shadow.work_dir)
        return COMMAND_HANDLERS[parsed_args.command](shadow, parsed_args)

    except (ShadowError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
