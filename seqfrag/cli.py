#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for SeqFrag.

This module provides the main CLI entry point and all subcommands for
the synthetic read fragment generator.
"""

import logging
import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config import (
    ConfigParser,
    ConfigValidationError,
    FragmentConfig,
    load_config,
    save_config_template,
    validate_config,
)
from .config.schema import TEMPLATES
from .io import SequenceReader, UnrecognizedFormatError, open_file
from .simulation import FragmentGenerator, FragmentMode


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    SeqFrag: synthetic sequencing read fragment generator

    Simulates single-end, paired-end, mate-pair, PacBio-like and tiling
    contig fragments from FASTA or FASTQ input at a target coverage.
    """
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='seqfrag_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t',
              type=click.Choice(['default'] + list(TEMPLATES)),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    frag = config['fragmentation']
    regions = config['regions']
    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)

    click.echo("\nFragmentation:")
    click.echo(f"  Mode: {frag['mode']}")
    click.echo(f"  Read length: {frag['read_length']}")
    click.echo(f"  Coverage: {frag['coverage']}")
    click.echo(f"  Insert size: {frag['insert_size']}")
    click.echo(f"  Sampling: {'systematic' if frag['systematic'] else 'stochastic'}")

    click.echo("\nFiltering:")
    click.echo(f"  N-max: {frag['n_max'] if frag['n_max'] is not None else 'off'}")
    click.echo(f"  Quality: {frag['quality'] if frag['quality'] is not None else 'off'}")
    click.echo(f"  Encoding: {'phred64' if frag['phred64'] else 'phred33'}")

    click.echo("\nRegions:")
    click.echo(f"  Region length: {regions['region_length']}")
    click.echo(f"  Length factor: {regions['region_length_factor']}")


# ============================================================================
# Fragmentation Command
# ============================================================================

def _flag(value):
    """Map an unset boolean flag to None so it does not override config values."""
    return True if value else None


@main.command()
@click.argument('mode_arg', metavar='MODE', required=False,
                type=click.Choice(FragmentMode.choices()))
@click.option('--mode', '-m', type=click.Choice(FragmentMode.choices()),
              help='Fragmentation mode (alternative to the MODE argument)')
@click.option('--length', '-l', type=int, help='Read length (mean length for pacbio/contig)')
@click.option('--coverage', '-c', type=int, help='Target coverage (contig default: 1)')
@click.option('--insert-size', '-i', type=int, help='Insert size for pe/mp [default: 180]')
@click.option('--systematic', '-s', is_flag=True, help='Evenly spaced fragments, no randomness')
@click.option('--N-max', '-N', 'n_max', type=int, help='Max number of Ns per read')
@click.option('--quality', '-Q', metavar='MIN:MAXBAD',
              help='Drop reads with more than MAXBAD bases below MIN [default: 20:0]; '
                   'FASTA input is checked against its written Q40 qualities')
@click.option('--phred64', '-P', is_flag=True, help='Input qualities use offset 64')
@click.option('--prefix', '-r', help='Read name prefix [default: r]')
@click.option('--progress', '-p', is_flag=True, help='Print processed Mbp to stderr')
@click.option('--seed', type=int, help='Random seed for reproducible output')
@click.option('--region-length', type=int, help='Bases per sampling region [default: 800000]')
@click.option('--input', '-I', 'input_path', type=click.Path(), default='-',
              help='Input FASTA/FASTQ (default: stdin)')
@click.option('--output', '-o', 'output_path', type=click.Path(), default='-',
              help='Output file (default: stdout)')
@click.option('--config', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML); command-line options take precedence')
def frag(mode_arg, mode, length, coverage, insert_size, systematic, n_max, quality,
         phred64, prefix, progress, seed, region_length, input_path, output_path, config_file):
    """
    Generate sequencing fragments from FASTA/FASTQ input.

    MODE is one of se, pe, mp, pacbio or contig. Fragmentation is always
    invoked as `seqfrag frag MODE ...`, next to the `config` commands.

    \b
    Example:
        seqfrag frag se -l 100 -c 10 < genome.fa > reads.fq
    """
    if mode_arg and mode and mode_arg != mode:
        raise click.UsageError(f"Conflicting modes: {mode_arg} (argument) vs {mode} (--mode)")

    overrides = {
        'fragmentation.mode': mode_arg or mode,
        'fragmentation.read_length': length,
        'fragmentation.coverage': coverage,
        'fragmentation.insert_size': insert_size,
        'fragmentation.systematic': _flag(systematic),
        'fragmentation.n_max': n_max,
        'fragmentation.quality': quality,
        'fragmentation.phred64': _flag(phred64),
        'fragmentation.prefix': prefix,
        'fragmentation.seed': seed,
        'regions.region_length': region_length,
        'output.progress': _flag(progress),
    }

    try:
        parser = ConfigParser(config_file)
        parser.merge_cli_overrides(overrides)
        frag_config = FragmentConfig.from_parser(parser)
    except ConfigValidationError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    in_handle = sys.stdin if input_path == '-' else None
    out_handle = sys.stdout if output_path == '-' else None
    try:
        if in_handle is None:
            in_handle = open_file(input_path, 'r')
        reader = SequenceReader(in_handle)
        if out_handle is None:
            out_handle = open_file(output_path, 'w')

        generator = FragmentGenerator(frag_config, out=out_handle)
        generator.run(reader)
    except (UnrecognizedFormatError, ValueError, OSError) as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)
    finally:
        if in_handle is not None and in_handle is not sys.stdin:
            in_handle.close()
        if out_handle is not None and out_handle is not sys.stdout:
            out_handle.close()


if __name__ == '__main__':
    sys.exit(main())
