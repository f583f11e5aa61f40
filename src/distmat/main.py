"""Command line interface for distmat."""

import argparse
import sys
from pathlib import Path

from distmat import __version__
from distmat.utils.config import (
    load_configuration, create_default_configuration, save_configuration, merge_configurations
)
from distmat.core.exceptions import ConfigurationError, DistmatError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the distmat CLI."""
    parser = argparse.ArgumentParser(
        prog='distmat',
        description='distmat: pairwise distance matrices for aligned sequences',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Gap-compressed identity (default)
  distmat alignment.fa -o identity.txt

  # Hamming distance on 8 cores
  distmat alignment.fa -m hamming -t 8 -o hamming.txt

  # Generate config template
  distmat --init-config distmat.yaml
        """.strip()
    )

    parser.add_argument('input', nargs='?', type=Path, metavar='INPUT',
                        help='Aligned sequences in FASTA format')

    special_group = parser.add_argument_group('Special modes')
    special_group.add_argument('--init-config', type=Path, metavar='FILE',
                               help='Create default configuration file and exit')

    core_group = parser.add_argument_group('Core options')
    core_group.add_argument('--outfile', '-o', type=Path, default=Path('distmat.out.txt'),
                            help='Output TSV file (default: %(default)s)')
    core_group.add_argument('--method', '-m', choices=['hamming', 'identity', 'similarity'],
                            help='Distance method (default: identity)')
    core_group.add_argument('--config', '-c', type=Path,
                            help='Configuration file (YAML or JSON)')
    core_group.add_argument('--no-validate', action='store_true',
                            help='Skip alignment validation')
    core_group.add_argument('--verbose', '-v', action='store_true',
                            help='Enable verbose output')
    core_group.add_argument(
        '--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging verbosity level (default: INFO)')

    resource_group = parser.add_argument_group('Resource parameters')
    resource_group.add_argument('--nthread', '-t', type=int, metavar='INT',
                                help='Number of worker processes; 0 uses all physical cores (default: 0)')

    parser.add_argument('--version', action='version', version=f'distmat {__version__}')

    return parser


def cli() -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    try:
        if args.init_config:
            _handle_init_config(args.init_config)
            return

        if not args.input:
            print("Error: INPUT is required", file=sys.stderr)
            print("Use --help to see all available options", file=sys.stderr)
            sys.exit(1)

        if not args.input.exists():
            print(f"Error: Input file does not exist: {args.input}", file=sys.stderr)
            sys.exit(1)

        if args.config:
            if not args.config.exists():
                print(f"Error: Configuration file does not exist: {args.config}", file=sys.stderr)
                sys.exit(1)
            config = load_configuration(args.config)
            if args.verbose:
                print(f"Loaded configuration from {args.config}")
        else:
            config = create_default_configuration()

        config = merge_configurations(config, _cli_overrides(args))
        log_level = config["logging"]["level"].upper()

        from distmat.pipeline import run_distmat_pipeline

        results = run_distmat_pipeline(
            input_file=args.input,
            output_file=args.outfile,
            config=config,
            invocation=" ".join(sys.argv),
            validate_inputs=not args.no_validate,
            log_level=log_level
        )

        if args.verbose:
            print(f"Compared {results['n_sequences']} sequences ({results['n_pairs']} pairs)")
            print(f"Results saved to: {results['output_file']}")

    except DistmatError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def _handle_init_config(output_path: Path) -> None:
    """Handle --init-config mode."""
    try:
        save_configuration(create_default_configuration(), output_path)
        print(f"Created default configuration: {output_path}")
    except ConfigurationError as e:
        print(f"Error creating configuration: {e}", file=sys.stderr)
        sys.exit(1)


def _cli_overrides(args: argparse.Namespace) -> dict:
    """Collect configuration overrides given on the command line."""
    overrides = {}

    if args.method is not None:
        overrides.setdefault('distance', {})['method'] = args.method
    if args.nthread is not None:
        overrides.setdefault('resources', {})['threads'] = args.nthread
    if args.log_level is not None:
        overrides.setdefault('logging', {})['level'] = args.log_level
    elif args.verbose:
        overrides.setdefault('logging', {})['level'] = 'DEBUG'

    return overrides


if __name__ == '__main__':
    cli()
