"""CLI commands for repository and owner enumeration."""

import argparse
import json
import sys
from dataclasses import asdict

import httpx

from .errors import FetchError, PartialResultError


def _dump(data):
    json.dump(data, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _records(records):
    return [asdict(r) for r in records]


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Enumerate GitHub owners and repositories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--skip-cache",
        action="store_true",
        help="Skip reading from cache (still writes to cache)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # owner subcommand
    owner_parser = subparsers.add_parser(
        "owner",
        help="Look up a user or organization",
    )
    owner_parser.add_argument("login", help="User or organization login")

    # repos subcommand
    repos_parser = subparsers.add_parser(
        "repos",
        help="List repositories owned by a user or organization",
    )
    repos_parser.add_argument("login", help="User or organization login")
    repos_parser.add_argument(
        "--include-forks",
        action="store_true",
        help="Keep forks in a user's listing (organizations never include them)",
    )

    # members subcommand
    members_parser = subparsers.add_parser(
        "members",
        help="List members of an organization",
    )
    members_parser.add_argument("login", help="Organization login")

    # bound subcommand
    subparsers.add_parser(
        "bound",
        help="Find the highest non-fork repository id currently assigned",
    )

    # scan subcommand
    scan_parser = subparsers.add_parser(
        "scan",
        help="List every non-fork repository with an id in (start, end]",
    )
    scan_parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="Exclusive lower id bound (default: 0)",
    )
    scan_parser.add_argument(
        "--end",
        type=int,
        default=None,
        help="Inclusive upper id bound (default: found with the bound search)",
    )
    scan_parser.add_argument(
        "--default-branch",
        default=None,
        help="Report this branch for every repository (default: DEFAULT_BRANCH setting, else GitHub's value)",
    )

    # api subcommand
    api_parser = subparsers.add_parser(
        "api",
        help="Make a generic cached GitHub API call",
    )
    api_parser.add_argument(
        "endpoint",
        help="API endpoint path (e.g., orgs/octo-org/members)",
    )
    api_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter (repeatable, e.g., --param per_page=100)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "api":
        from .rest import get_rest_client

        params = {}
        for p in args.param:
            k, _, v = p.partition("=")
            params[k] = v

        try:
            resp = get_rest_client(skip_cache=args.skip_cache).api(args.endpoint, params=params or None)
        except (httpx.HTTPError, RuntimeError) as e:
            sys.stderr.write(f"Error: {e}\n")
            return 1
        _dump(resp.body)
        return 0

    from .fetcher import GitHubFetcher

    fetcher = GitHubFetcher(skip_cache=args.skip_cache)

    try:
        if args.command == "owner":
            from .list_owners import get_owner

            _dump(asdict(get_owner(fetcher, args.login)))
        elif args.command == "repos":
            from .list_owners import list_owner_repositories

            _dump(_records(list_owner_repositories(fetcher, args.login, include_forks=args.include_forks)))
        elif args.command == "members":
            from .list_owners import list_organization_members

            _dump(_records(list_organization_members(fetcher, args.login)))
        elif args.command == "bound":
            from .find_upper_bound import find_upper_bound

            _dump(find_upper_bound(fetcher))
        elif args.command == "scan":
            from .find_upper_bound import find_upper_bound
            from .scan_repositories import scan_repositories
            from .settings import get_settings

            end = args.end if args.end is not None else find_upper_bound(fetcher)
            default_branch = (
                args.default_branch if args.default_branch is not None else get_settings().default_branch
            )
            _dump(_records(scan_repositories(fetcher, args.start, end, default_branch=default_branch)))
    except PartialResultError as e:
        _dump(_records(e.results))
        sys.stderr.write(f"Error: {e}\n")
        return 1
    except FetchError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
