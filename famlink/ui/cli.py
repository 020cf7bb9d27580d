"""Command-line interface for famlink."""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..config import SuggestionConfig, default_config
from ..core.member import Member
from ..matching import MatchScorer, RelationClassifier, SuggestionRanker
from ..search import search_members, distinctive_info, find_similar_members
from ..stats import (
    surname_distribution,
    birth_country_distribution,
    nationality_distribution,
    tree_summary,
    upcoming_birthdays,
)


class CLIError(Exception):
    """Raised for user-facing errors such as unreadable input or unknown ids."""


def load_members(filepath: str) -> List[Member]:
    """Load the members of a tree from a JSON export.

    Args:
        filepath: Path to a JSON file holding a list of member documents,
            or an object with a "members" list

    Returns:
        List of Member objects

    Raises:
        CLIError: If the file is missing or not a valid export
    """
    path = Path(filepath)
    if not path.exists():
        raise CLIError(f"File not found: {filepath}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON in {filepath}: {e}") from e

    if isinstance(data, dict):
        data = data.get('members', [])
    if not isinstance(data, list):
        raise CLIError(f"Expected a list of members in {filepath}")

    try:
        return [Member.from_dict(record) for record in data]
    except (KeyError, TypeError) as e:
        raise CLIError(f"Invalid member record in {filepath}: {e}") from e


def non_negative_int(value: str) -> int:
    """argparse type for counts such as --limit."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or more, got {number}")
    return number


def find_member(members: List[Member], member_id: str) -> Member:
    """Look up a member by id, raising CLIError if absent."""
    for member in members:
        if member.id == member_id:
            return member
    raise CLIError(f"Member not found: {member_id}")


def suggest_command(args: argparse.Namespace) -> int:
    """Execute the suggest command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    members = load_members(args.file)
    new_member = find_member(members, args.member_id)

    config = SuggestionConfig(
        min_score=args.min_score if args.min_score is not None else default_config.min_score,
        max_results=args.limit,
        locale=args.locale,
    )
    ranker = SuggestionRanker(config=config)
    suggestions = ranker.top(new_member, members)

    if args.json:
        print(json.dumps([s.to_dict(config.locale) for s in suggestions], ensure_ascii=False, indent=2))
        return 0

    print(f"\nSuggestions for {new_member}{distinctive_info(new_member, members)}")
    print("-" * 60)

    if not suggestions:
        print("No suggestions above the threshold.")
    for i, suggestion in enumerate(suggestions, start=1):
        candidate = suggestion.member
        print(
            f"{i}. {candidate}{distinctive_info(candidate, members)}"
            f" - {suggestion.relation.display_name(config.locale)} ({suggestion.score}%)"
        )

    print("-" * 60 + "\n")
    return 0


def relation_command(args: argparse.Namespace) -> int:
    """Execute the relation command."""
    members = load_members(args.file)
    new_member = find_member(members, args.member_id)
    other = find_member(members, args.other_id)

    relation = RelationClassifier().classify(new_member, other)
    breakdown = MatchScorer().explain(new_member, other)

    print(f"{other} is a probable: {relation.display_name(args.locale)}")
    print(breakdown)
    return 0


def stats_command(args: argparse.Namespace) -> int:
    """Execute the stats command."""
    members = load_members(args.file)
    summary = tree_summary(members)

    print("\n" + "=" * 60)
    print("FAMILY TREE STATISTICS")
    print("=" * 60)
    print(f"Total Members:          {summary.member_count:,}")
    print(f"Surnames:               {summary.surname_count:,}")
    print(f"Birth Countries:        {summary.country_count:,}")

    if summary.earliest_birth_year is not None:
        print(f"Birth Years:            {summary.earliest_birth_year} - {summary.latest_birth_year}")

    sections = [
        ("SURNAMES", surname_distribution(members)),
        ("BIRTH COUNTRIES", birth_country_distribution(members)),
        ("NATIONALITIES", nationality_distribution(members)),
    ]
    for title, entries in sections:
        if not entries:
            continue
        print(f"\n{title}:")
        for entry in entries:
            print(f"  {entry.label:<22}{entry.count:>5}  ({entry.percentage}%)")

    birthdays = upcoming_birthdays(members, today=args.today)
    if birthdays:
        print("\nUPCOMING BIRTHDAYS (next 30 days):")
        for birthday in birthdays:
            print(f"  {birthday.birthday:%d %b}  {birthday.member.full_name or 'Unknown'} turns {birthday.age}")

    print("=" * 60 + "\n")
    return 0


def search_command(args: argparse.Namespace) -> int:
    """Execute the search command."""
    members = load_members(args.file)

    if args.fuzzy:
        parts = args.term.split(None, 1) or ['']
        query = Member(id='', first_name=parts[0], last_name=parts[1] if len(parts) == 2 else '')
        matches = find_similar_members(query, members, threshold=args.threshold)
        results = [m for m, _ in matches][:args.limit]
    else:
        results = search_members(members, args.term, limit=args.limit)

    if not results:
        print("No members found.")
        return 0

    for member in results:
        print(f"{member.id}\t{member}{distinctive_info(member, members)}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='famlink',
        description='Suggest probable relatives for members of a family tree.',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    # Suggest command
    suggest_parser = subparsers.add_parser(
        'suggest',
        help='Rank probable relatives of a member'
    )
    suggest_parser.add_argument('file', help='Path to the JSON export of the tree')
    suggest_parser.add_argument('member_id', help='Id of the newly added member')
    suggest_parser.add_argument(
        '-n', '--limit',
        type=non_negative_int,
        default=None,
        help='Maximum number of suggestions to display (default: all)'
    )
    suggest_parser.add_argument(
        '--min-score',
        type=int,
        default=None,
        help=f'Only show suggestions scoring above this (default: {default_config.min_score})'
    )
    suggest_parser.add_argument(
        '--locale',
        choices=['en', 'fr'],
        default=default_config.locale,
        help='Language for relation labels'
    )
    suggest_parser.add_argument(
        '--json',
        action='store_true',
        help='Print suggestions as JSON'
    )

    # Relation command
    relation_parser = subparsers.add_parser(
        'relation',
        help='Explain the score and probable relation between two members'
    )
    relation_parser.add_argument('file', help='Path to the JSON export of the tree')
    relation_parser.add_argument('member_id', help='Id of the newly added member')
    relation_parser.add_argument('other_id', help='Id of the existing member')
    relation_parser.add_argument(
        '--locale',
        choices=['en', 'fr'],
        default=default_config.locale,
        help='Language for relation labels'
    )

    # Stats command
    stats_parser = subparsers.add_parser(
        'stats',
        help='Display statistics about a tree'
    )
    stats_parser.add_argument('file', help='Path to the JSON export of the tree')
    stats_parser.add_argument(
        '--today',
        type=date.fromisoformat,
        default=None,
        help='Reference date for upcoming birthdays, YYYY-MM-DD (default: today)'
    )

    # Search command
    search_parser = subparsers.add_parser(
        'search',
        help='Search members by name'
    )
    search_parser.add_argument('file', help='Path to the JSON export of the tree')
    search_parser.add_argument('term', help='Name or part of a name')
    search_parser.add_argument(
        '-n', '--limit',
        type=non_negative_int,
        default=10,
        help='Maximum number of results (default: 10)'
    )
    search_parser.add_argument(
        '--fuzzy',
        action='store_true',
        help='Match spelling variants instead of substrings'
    )
    search_parser.add_argument(
        '--threshold',
        type=float,
        default=85.0,
        help='Minimum similarity for --fuzzy (default: 85)'
    )

    return parser


COMMANDS = {
    'suggest': suggest_command,
    'relation': relation_command,
    'stats': stats_command,
    'search': search_command,
}


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # If no command specified, print help
    if not args.command:
        parser.print_help()
        return 0

    try:
        return COMMANDS[args.command](args)
    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
