"""
Command Line Interface for the string searcher
"""
import os
import sys
import json
import click
from pydantic import ValidationError
from string_searcher.core.config import Config, SearchConfig
from string_searcher.core.exceptions import InvalidConfiguration
from string_searcher.search.engine import SearchEngine
from string_searcher.utils.helpers import MonotonicClock, format_duration
from string_searcher.utils.logger import setup_logging


@click.command()
@click.argument('pattern')
@click.argument('mask', required=False)
@click.option('--recursive', '-r', is_flag=True, help='Search the root directory and its subdirectories')
@click.option('--depth', '-d', default=0, type=int,
              help='Deepest subdirectory level to search, 0 for unlimited')
@click.option('--ignore-case', '-i', is_flag=True, help='Ignore case of ASCII letters')
@click.option('--file', '-f', 'file_path', help='File to look through (required without --recursive)')
@click.option('--root', default=None, help='Directory to search from (defaults to the current directory)')
@click.option('--workers', '-w', type=int, help='Number of worker threads (defaults to CPU count)')
@click.option('--config', '-c', 'config_file', help='Configuration file path')
@click.option('--output', '-o', help='Output file for results (JSON format)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def cli(pattern, mask, recursive, depth, ignore_case, file_path, root, workers, config_file,
        output, verbose):
    """Search files for lines containing PATTERN, optionally filtered by MASK (e.g. *.txt)"""
    try:
        config = Config.load_from_file(config_file) if config_file else Config.from_env()
        search_config = SearchConfig.create(
            pattern=pattern,
            root=root or os.getcwd(),
            file_path=file_path,
            mask=mask,
            case_insensitive=ignore_case,
            recursive=recursive,
            max_depth=depth,
        )
        worker_count = workers if workers is not None else config.engine.worker_count
        engine = SearchEngine(worker_count=worker_count, clock=MonotonicClock())
    except (InvalidConfiguration, ValidationError, ValueError, OSError) as e:
        click.echo(f"Incorrect argument usage: {e}", err=True)
        sys.exit(1)

    setup_logging('DEBUG' if verbose else config.engine.log_level, config.engine.log_file)

    result = engine.search(search_config)
    stats = result.statistics

    click.echo(f"Searched through {stats.files_searched} files")

    if result.matches:
        click.echo(
            f"Found {stats.total_matches} occurrences across {len(result.matches)} files"
        )
        for path, lines in result.sorted_matches():
            line_list = ", ".join(str(line) for line in lines)
            click.echo(f"Found {len(lines)} occurrences in {path} at lines: {line_list}")
    else:
        click.echo("No occurrences found!")

    for warning in result.warnings:
        click.echo(f"Warning: skipped {warning.path}: {warning.message}", err=True)

    if output:
        with open(output, 'w') as f:
            json.dump(result.model_dump(mode='json'), f, indent=2)
        click.echo(f"Results saved to {output}")

    click.echo(f"Finished in {format_duration(stats.elapsed_seconds or 0.0)}")


def main():
    """Main entry point"""
    cli()


if __name__ == '__main__':
    main()
