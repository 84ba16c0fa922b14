#!/usr/bin/env python3
"""
LoreWeaver CLI
==============
Command-line interface for exploring a name catalog.

Usage:
    loreweaver similar "Philip"
    loreweaver classify "Europe > France" "Europe > France > Brittany" --tiers origin
    loreweaver phonetics "ih-LIZ-uh-beth" --rhymes "SETH"
    loreweaver filter --origin "Europe > France" --syllables 2
    loreweaver duplicates "Kim"
    loreweaver generate --type surname --seed 7
    loreweaver pair --first "Elizabeth"
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.table import Table
from rich import box

from loreweaver import __version__
from loreweaver.models import Gender, NameStatus, NameType
from loreweaver.settings import get_setting

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}")

    def json(self, data):
        """Machine-readable output; printed even in quiet mode."""
        print(json.dumps(data, indent=2, ensure_ascii=False))

    def table(self, headers: list, rows: list, title: str = None):
        """Print a formatted table."""
        if self.quiet:
            return

        table = Table(title=title, box=box.SIMPLE_HEAD, show_lines=False)
        for header in headers:
            table.add_column(str(header), overflow="fold")
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def setup_logging(verbose: bool = False):
    level = "DEBUG" if verbose else None
    if level is None:
        from loreweaver.config import config
        level = config().log_level or "WARNING"
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=get_setting("logging.format", "%(levelname)s %(name)s: %(message)s"),
    )


def load_names(args):
    from loreweaver.catalog import load_catalog
    return load_catalog(args.catalog)


def resolve_name(names, query: str, out: Output):
    from loreweaver.catalog import find_by_name

    name = find_by_name(names, query)
    if name is None:
        out.error(f"'{query}' is not in the catalog")
    return name


def _csv(value):
    return tuple(v.strip() for v in value.split(',') if v.strip()) if value else ()


# =============================================================================
# Commands
# =============================================================================

def cmd_similar(args, out: Output):
    """Show names related to a catalog entry."""
    from loreweaver.similarity import NameSimilarityFinder

    names = load_names(args)
    target = resolve_name(names, args.name, out)
    if target is None:
        return 1

    finder = NameSimilarityFinder(threshold=args.threshold)
    results = finder.find(target, names)
    if args.limit:
        results = results[:args.limit]

    if args.json:
        out.json([r.to_dict() for r in results])
        return 0

    if not results:
        out.print(f"No names similar to {target.name} (threshold {finder.threshold})")
        return 0

    out.table(
        ["Name", "Score", "Why"],
        [(r.candidate.name, r.score, r.reason) for r in results],
        title=f"Similar to {target.name}",
    )
    return 0


def cmd_classify(args, out: Output):
    """Classify the relationship between two taxonomy paths."""
    from loreweaver.config import get_tier_scores
    from loreweaver.hierarchy import classify_path, is_descendant_or_equal, relationship

    tiers = get_tier_scores(args.tiers)
    score = classify_path(args.path_a, args.path_b, tiers)
    relation = relationship(args.path_a, args.path_b) or "unrelated"

    data = {
        'path_a': args.path_a,
        'path_b': args.path_b,
        'tiers': args.tiers,
        'score': score,
        'relation': relation,
        'a_under_b': is_descendant_or_equal(args.path_a, args.path_b),
        'b_under_a': is_descendant_or_equal(args.path_b, args.path_a),
    }
    if args.json:
        out.json(data)
        return 0

    out.print(f"{args.path_a}  vs  {args.path_b}")
    out.print(f"  Relation: {relation}")
    out.print(f"  Score ({args.tiers}): {score}")
    return 0


def cmd_phonetics(args, out: Output):
    """Show syllables and sound matches for a pronunciation."""
    from loreweaver.phonetics import (
        syllable_count, starts_with_sound, ends_with_sound, rhymes, pronunciation_score,
    )

    data = {
        'pronunciation': args.pronunciation,
        'syllables': syllable_count(args.pronunciation),
    }
    if args.starts:
        data['starts_with'] = starts_with_sound(args.pronunciation, args.starts)
    if args.ends:
        data['ends_with'] = ends_with_sound(args.pronunciation, args.ends)
    if args.rhymes:
        data['rhymes'] = rhymes(args.pronunciation, args.rhymes)
        data['pronunciation_score'] = pronunciation_score(args.pronunciation, args.rhymes)

    if args.json:
        out.json(data)
        return 0

    out.print(f"Pronunciation: {args.pronunciation}")
    out.print(f"  Syllables: {data['syllables']}")
    if 'starts_with' in data:
        out.print(f"  Starts with '{args.starts}': {'yes' if data['starts_with'] else 'no'}")
    if 'ends_with' in data:
        out.print(f"  Ends with '{args.ends}': {'yes' if data['ends_with'] else 'no'}")
    if 'rhymes' in data:
        out.print(f"  Rhymes with '{args.rhymes}': {'yes' if data['rhymes'] else 'no'}")
        out.print(f"  Pronunciation score: {data['pronunciation_score']}")
    return 0


def cmd_duplicates(args, out: Output):
    """List records spelled like a catalog entry."""
    from loreweaver.duplicates import find_duplicate_names, distinguishing_label

    names = load_names(args)
    target = resolve_name(names, args.name, out)
    if target is None:
        return 1

    duplicates = find_duplicate_names(target, names)
    if args.json:
        out.json([
            {'id': d.id, 'name': d.name, 'label': distinguishing_label(d)}
            for d in duplicates
        ])
        return 0

    if not duplicates:
        out.print(f"No other records spelled '{target.name}'")
        return 0

    rows = [(target.id, target.name, distinguishing_label(target))]
    rows += [(d.id, d.name, distinguishing_label(d)) for d in duplicates]
    out.table(["ID", "Name", "Label"], rows, title=f"Records spelled '{target.name}'")
    return 0


def cmd_filter(args, out: Output):
    """Filter the catalog."""
    from loreweaver.filters import NameFilter, apply_filter

    flt = NameFilter(
        search=args.search,
        gender=Gender(args.gender) if args.gender else None,
        origins=tuple(args.origin or ()),
        status=NameStatus(args.status) if args.status else None,
        name_type=NameType(args.name_type) if args.name_type else None,
        category=_csv(args.category),
        literal_meaning=args.meaning,
        feelings=_csv(args.feelings),
        syllables=args.syllables,
        starts_with=args.starts,
        ends_with=args.ends,
        rhymes_with=args.rhymes,
    )

    entries = apply_filter(load_names(args), flt)
    if args.limit:
        entries = entries[:args.limit]

    if args.json:
        out.json([
            {
                'id': e.name.id,
                'name': e.display_name,
                'primary': e.is_primary,
                'pronunciation': e.pronunciation,
            }
            for e in entries
        ])
        return 0

    out.table(
        ["Name", "Pronunciation", "Form of"],
        [(e.display_name, e.pronunciation or '', '' if e.is_primary else e.name.name)
         for e in entries],
        title=f"{len(entries)} names",
    )
    return 0


def cmd_syllables(args, out: Output):
    """List the syllable counts present in the catalog."""
    from loreweaver.phonetics import unique_syllable_counts

    counts = unique_syllable_counts(load_names(args))
    if args.json:
        out.json(counts)
        return 0
    for count in counts:
        out.print(f"{count} {'syllable' if count == 1 else 'syllables'}")
    return 0


def cmd_sort(args, out: Output):
    """Sort the catalog file alphabetically."""
    from loreweaver.catalog import default_catalog_path, save_catalog, sort_catalog

    names = load_names(args)
    target = args.output or args.catalog or default_catalog_path()
    path = save_catalog(sort_catalog(names), target)
    out.success(f"Sorted {len(names)} names into {path}")
    return 0


def cmd_profiles(args, out: Output):
    """List tier score profiles."""
    from loreweaver.config import list_profiles

    rows = []
    for name, profile in list_profiles().items():
        t = profile['tiers']
        rows.append((name, t.exact, t.sibling, t.parent_child, t.cousin, profile['description']))
    out.table(["Profile", "Exact", "Sibling", "Parent/child", "Cousin", "Description"], rows)
    return 0


def _options(args, prefix: str = ''):
    """GeneratorOptions from generate/pair arguments (pair uses first_/surname_ prefixes)."""
    from loreweaver.generator import GeneratorOptions, LOGIC_ALL, LOGIC_ANY

    def arg(name, default=None):
        return getattr(args, prefix + name, default)

    gender = arg('gender')
    return GeneratorOptions(
        gender=Gender(gender) if gender else None,
        only_available=not args.include_used,
        origins=tuple(arg('origin') or ()),
        categories=tuple(arg('category') or ()),
        category_logic=LOGIC_ANY if arg('any_category') else LOGIC_ALL,
        literal_meaning=arg('meaning'),
        feelings=tuple(arg('feeling') or ()),
        feeling_logic=LOGIC_ANY if arg('any_feeling') else LOGIC_ALL,
        syllables=arg('syllables'),
        starts_with=arg('starts'),
        ends_with=arg('ends'),
        rhymes_with=arg('rhymes'),
    )


def _blocked_pairs(args):
    from loreweaver.catalog import load_blocked_pairs
    return load_blocked_pairs(args.blocked_pairs)


def cmd_generate(args, out: Output):
    """Draw random names from the catalog."""
    from loreweaver.generator import NameGenerator

    name_type = None if args.type == 'any' else NameType(args.type)
    gen = NameGenerator(load_names(args), seed=args.seed)
    opts = _options(args)

    drawn = []
    for _ in range(args.count):
        name = gen.generate(opts, name_type)
        if name is None:
            break
        drawn.append(name)

    if args.json:
        out.json([n.to_dict() for n in drawn])
        return 0 if drawn else 1

    if not drawn:
        out.error("No names match these filters")
        return 1

    for name in drawn:
        line = name.name
        if name.pronunciation:
            line += f"  ({name.pronunciation})"
        if name.meaning:
            line += f"  - {name.meaning}"
        out.print(line)
    return 0


def cmd_pair(args, out: Output):
    """Draw first name + surname pairs, skipping blocked combinations."""
    from loreweaver.generator import NameGenerator

    names = load_names(args)
    first = surname = None
    if args.first:
        first = resolve_name(names, args.first, out)
        if first is None:
            return 1
    if args.surname:
        surname = resolve_name(names, args.surname, out)
        if surname is None:
            return 1

    gen = NameGenerator(names, seed=args.seed)
    blocked = _blocked_pairs(args)
    pairs = [
        gen.generate_pair(_options(args, 'first_'), _options(args, 'surname_'),
                          blocked=blocked, first=first, surname=surname)
        for _ in range(args.count)
    ]

    if args.json:
        out.json([p.to_dict() for p in pairs])
        return 0

    for pair in pairs:
        out.print(pair.full_name or "(no match)")
    return 0


def cmd_block(args, out: Output):
    """Block a first name + surname combination."""
    from loreweaver.blocked_pairs import add_blocked_pair
    from loreweaver.catalog import save_blocked_pairs

    pairs = add_blocked_pair(_blocked_pairs(args), args.first_name, args.surname,
                             reason=args.reason, notes=args.notes)
    save_blocked_pairs(pairs, args.blocked_pairs)
    out.success(f"Blocked {pairs[-1].first_name} {pairs[-1].surname} ({pairs[-1].id})")
    return 0


def cmd_unblock(args, out: Output):
    """Remove a blocked combination by id."""
    from loreweaver.blocked_pairs import remove_blocked_pair
    from loreweaver.catalog import save_blocked_pairs

    try:
        pairs = remove_blocked_pair(_blocked_pairs(args), args.id)
    except KeyError:
        out.error(f"No blocked pair with id '{args.id}'")
        return 1
    save_blocked_pairs(pairs, args.blocked_pairs)
    out.success(f"Unblocked {args.id}")
    return 0


def cmd_blocked(args, out: Output):
    """List blocked combinations."""
    pairs = _blocked_pairs(args)
    if args.json:
        out.json([p.to_dict() for p in pairs])
        return 0
    if not pairs:
        out.print("No blocked pairs")
        return 0
    out.table(
        ["ID", "First name", "Surname", "Reason"],
        [(p.id, p.first_name, p.surname, p.reason or '') for p in pairs],
        title=f"{len(pairs)} blocked pairs",
    )
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='loreweaver',
        description='LoreWeaver - Name catalog relatedness tools',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s similar "Philip" --threshold 50
  %(prog)s classify "Nature > Water" "Nature > Water > Rivers" --tiers category
  %(prog)s phonetics "KATE" --rhymes "NATE"
  %(prog)s filter --origin "Europe > France" --syllables 2
  %(prog)s duplicates "Kim"
  %(prog)s syllables
  %(prog)s generate --origin "Europe" --syllables 2 --count 5
  %(prog)s pair --surname "Tate"
  %(prog)s block "Kate" "Tate" --reason "rhymes"
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging and tracebacks')
    parser.add_argument('--catalog', help='Path to names.json (default: app.yaml / LOREWEAVER_CATALOG)')
    parser.add_argument('--blocked-pairs',
                        help='Path to blocked-pairs.json (default: app.yaml / LOREWEAVER_BLOCKED_PAIRS)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- similar ---
    p = subparsers.add_parser('similar', aliases=['sim'], help='Find similar names')
    p.add_argument('name', help='Name or id from the catalog')
    p.add_argument('--threshold', '-t', type=int, help='Minimum score (default: 60)')
    p.add_argument('--limit', type=int, help='Max results')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- classify ---
    p = subparsers.add_parser('classify', help='Classify two taxonomy paths')
    p.add_argument('path_a', help='First path, e.g. "Europe > France"')
    p.add_argument('path_b', help='Second path')
    p.add_argument('--tiers', choices=['category', 'origin'], default='category',
                   help='Tier score profile (default: category)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- phonetics ---
    p = subparsers.add_parser('phonetics', aliases=['ph'], help='Inspect a pronunciation')
    p.add_argument('pronunciation', help='Pronunciation, syllables separated by "-"')
    p.add_argument('--starts', help='Check whether it starts with this sound')
    p.add_argument('--ends', help='Check whether it ends with this sound')
    p.add_argument('--rhymes', help='Check whether it rhymes with this pronunciation')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- duplicates ---
    p = subparsers.add_parser('duplicates', aliases=['dup'], help='Find same-spelled records')
    p.add_argument('name', help='Name or id from the catalog')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- filter ---
    p = subparsers.add_parser('filter', aliases=['ls'], help='Filter the catalog')
    p.add_argument('--search', '-s', help='Text search')
    p.add_argument('--gender', choices=[g.value for g in Gender])
    p.add_argument('--origin', action='append', help='Origin path (repeatable)')
    p.add_argument('--status', choices=[s.value for s in NameStatus])
    p.add_argument('--name-type', choices=[t.value for t in NameType])
    p.add_argument('--category', help='Category segments, comma-separated (main,sub,subsub)')
    p.add_argument('--meaning', help='Literal meaning contains')
    p.add_argument('--feelings', help='Comma-separated feelings (all required)')
    p.add_argument('--syllables', type=int, help='Exact syllable count')
    p.add_argument('--starts', help='Pronunciation starts with')
    p.add_argument('--ends', help='Pronunciation ends with')
    p.add_argument('--rhymes', help='Pronunciation rhymes with')
    p.add_argument('--limit', type=int, help='Max results')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- syllables ---
    p = subparsers.add_parser('syllables', help='List syllable counts in the catalog')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- sort ---
    p = subparsers.add_parser('sort', help='Sort the catalog file alphabetically')
    p.add_argument('--output', '-o', help='Write to this file instead of the catalog')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen'], help='Draw random names')
    p.add_argument('--type', choices=['firstName', 'surname', 'any'], default='firstName',
                   help='Name type (default: firstName)')
    p.add_argument('--gender', choices=[g.value for g in Gender], help='Ignored for surnames')
    p.add_argument('--origin', action='append', help='Origin path (repeatable)')
    p.add_argument('--category', action='append', help='Category path (repeatable)')
    p.add_argument('--any-category', action='store_true', help='Match any category instead of all')
    p.add_argument('--meaning', help='Literal meaning contains')
    p.add_argument('--feeling', action='append', help='Feeling (repeatable)')
    p.add_argument('--any-feeling', action='store_true', help='Match any feeling instead of all')
    p.add_argument('--include-used', action='store_true', help='Also draw names marked used')
    p.add_argument('--syllables', type=int, help='Exact syllable count')
    p.add_argument('--starts', help='Pronunciation starts with')
    p.add_argument('--ends', help='Pronunciation ends with')
    p.add_argument('--rhymes', help='Pronunciation rhymes with')
    p.add_argument('--count', '-n', type=int, default=1, help='Number of draws (default: 1)')
    p.add_argument('--seed', type=int, help='Random seed for reproducible draws')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- pair ---
    p = subparsers.add_parser('pair', help='Draw first name + surname pairs')
    p.add_argument('--first', help='Lock the first name (name or id)')
    p.add_argument('--surname', help='Lock the surname (name or id)')
    p.add_argument('--first-gender', choices=[g.value for g in Gender])
    p.add_argument('--first-origin', action='append', help='First name origin (repeatable)')
    p.add_argument('--surname-origin', action='append', help='Surname origin (repeatable)')
    p.add_argument('--first-syllables', type=int, help='First name syllable count')
    p.add_argument('--surname-syllables', type=int, help='Surname syllable count')
    p.add_argument('--include-used', action='store_true', help='Also draw names marked used')
    p.add_argument('--count', '-n', type=int, default=1, help='Number of pairs (default: 1)')
    p.add_argument('--seed', type=int, help='Random seed for reproducible draws')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- block / unblock / blocked ---
    p = subparsers.add_parser('block', help='Block a first name + surname combination')
    p.add_argument('first_name', help='First name')
    p.add_argument('surname', help='Surname')
    p.add_argument('--reason', help='Why the pair is blocked')
    p.add_argument('--notes', help='Free-form notes')

    p = subparsers.add_parser('unblock', help='Remove a blocked combination')
    p.add_argument('id', help='Blocked pair id (see: blocked)')

    p = subparsers.add_parser('blocked', help='List blocked combinations')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- profiles ---
    subparsers.add_parser('profiles', help='List tier score profiles')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    cmd_map = {
        'sim': 'similar',
        'ph': 'phonetics',
        'dup': 'duplicates',
        'ls': 'filter',
        'gen': 'generate',
    }
    command = cmd_map.get(args.command, args.command)

    setup_logging(args.verbose)
    out = Output(quiet=args.quiet)

    commands = {
        'similar': cmd_similar,
        'classify': cmd_classify,
        'phonetics': cmd_phonetics,
        'duplicates': cmd_duplicates,
        'filter': cmd_filter,
        'syllables': cmd_syllables,
        'sort': cmd_sort,
        'profiles': cmd_profiles,
        'generate': cmd_generate,
        'pair': cmd_pair,
        'block': cmd_block,
        'unblock': cmd_unblock,
        'blocked': cmd_blocked,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
