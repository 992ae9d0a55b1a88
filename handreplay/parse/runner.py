"""
Batch runner for PokerStars hand histories.
Splits transcript files into hands, parses each one and writes the results as JSONL.
"""

import logging
import argparse
import sys
from typing import Dict, Iterable, List, Optional, Union
from pathlib import Path

from .config import ParserConfig, load_config
from .interfaces import HandParser
from .schemas import ParseFailure, ParseResult, ParserError
from .site_generic import split_hands
from .site_pokerstars import PokerStarsParser

logger = logging.getLogger(__name__)


class ParserRunner:
    """Runs the hand parsers over files and directories."""

    def __init__(self, config: Optional[ParserConfig] = None):
        """
        Initialize the parser runner.

        Args:
            config: Parser settings; defaults apply when omitted
        """
        self.config = config or ParserConfig()
        self.parsers: List[HandParser] = [
            PokerStarsParser(self.config),
        ]

    def parse_hand_text(self, hand_text: str) -> ParseResult:
        """Parse one hand with the first parser that recognizes it."""
        for parser in self.parsers:
            if parser.detect(hand_text):
                return parser.parse(hand_text)

        first_line = hand_text.splitlines()[0]
        logger.warning(f"No parser recognizes hand starting with: {first_line[:80]}")
        return ParseFailure(error=ParserError(
            message="Unrecognized hand history format",
            line=0,
            context=first_line,
        ))

    def parse_text(self, text: str, file_id: str = 'unknown') -> List[ParseResult]:
        """
        Parse hand history text.

        Args:
            text: Raw text holding one or more hands
            file_id: Identifier for this file/text, used in log messages

        Returns:
            One ParseResult per hand found, in file order
        """
        results = [self.parse_hand_text(hand_text) for hand_text in split_hands(text)]

        failed = sum(1 for r in results if not r.success)
        logger.info(f"Parsed {len(results)} hands from {file_id} ({failed} failed)")
        return results

    def parse_file(self, file_path: Union[str, Path]) -> List[ParseResult]:
        """
        Parse a single file containing hand histories.

        Args:
            file_path: Path to the file to parse

        Returns:
            List of ParseResults; empty if the file cannot be read
        """
        file_path = Path(file_path)

        if not file_path.exists():
            logger.error(f"File not found: {file_path}")
            return []

        try:
            with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
                text = f.read()
        except OSError as e:
            logger.error(f"Failed to read file {file_path}: {e}")
            return []

        return self.parse_text(text, file_id=file_path.name)

    def parse_directory(
        self,
        directory: Union[str, Path],
        extensions: Iterable[str] = ('.txt',)
    ) -> Dict[str, List[ParseResult]]:
        """
        Parse all files in a directory.

        Args:
            directory: Directory containing hand history files
            extensions: File extensions to process

        Returns:
            Dictionary mapping file names to their results, in name order
        """
        directory = Path(directory)

        if not directory.is_dir():
            logger.error(f"Directory not found: {directory}")
            return {}

        results = {}
        suffixes = {ext.lower() for ext in extensions}

        for file_path in sorted(directory.iterdir()):
            if file_path.is_file() and file_path.suffix.lower() in suffixes:
                logger.info(f"Processing {file_path}")
                file_results = self.parse_file(file_path)
                if file_results:
                    results[file_path.name] = file_results

        logger.info(f"Parsed {len(results)} files from {directory}")
        return results

    def parse_path(self, path: Union[str, Path]) -> Dict[str, List[ParseResult]]:
        """A file or a directory of files."""
        path = Path(path)
        if path.is_dir():
            return self.parse_directory(path)
        return {path.name: self.parse_file(path)}


def write_jsonl(results: Iterable[ParseResult], out_jsonl: Union[str, Path]) -> Dict:
    """
    Write results to a JSONL file, one result per line.

    Args:
        results: Parse results, successes and failures alike
        out_jsonl: Output JSONL file path

    Returns:
        Summary dict with hand, ok and error counts
    """
    out_jsonl = Path(out_jsonl)
    out_jsonl.parent.mkdir(parents=True, exist_ok=True)

    stats = {"hands": 0, "ok": 0, "errors": 0, "output_file": str(out_jsonl)}

    with open(out_jsonl, 'w', encoding='utf-8') as jsonl_file:
        for result in results:
            jsonl_file.write(result.model_dump_json(exclude_none=True) + '\n')
            stats["hands"] += 1
            if result.success:
                stats["ok"] += 1
            else:
                stats["errors"] += 1

    logger.info(f"Wrote {stats['hands']} results to {out_jsonl} ({stats['errors']} failed)")
    return stats


# Convenience functions for module-level usage
_default_runner = None


def get_default_runner(reset: bool = False) -> ParserRunner:
    """Get or create the default parser runner."""
    global _default_runner
    if reset:
        _default_runner = None
    if _default_runner is None:
        _default_runner = ParserRunner()
    return _default_runner


def parse_file(file_path: Union[str, Path]) -> List[ParseResult]:
    """Parse a single file using the default runner."""
    return get_default_runner().parse_file(file_path)


def parse_directory(
    directory: Union[str, Path],
    extensions: Iterable[str] = ('.txt',)
) -> Dict[str, List[ParseResult]]:
    """Parse all files in a directory using the default runner."""
    return get_default_runner().parse_directory(directory, extensions)


# CLI interface
def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for parser runner."""
    parser = argparse.ArgumentParser(
        description='Parse PokerStars hand histories into JSONL',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--in',
        dest='input_path',
        required=True,
        help='Hand history file, or a directory of .txt files'
    )

    parser.add_argument(
        '--out',
        dest='output_file',
        required=True,
        help='Output JSONL file path'
    )

    parser.add_argument(
        '--config',
        dest='config_path',
        default=None,
        help='Path to parser YAML config (default: packaged config.yml)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.config_path) if args.config_path else load_config()
        runner = ParserRunner(config)
        by_file = runner.parse_path(args.input_path)
        stats = write_jsonl(
            (result for file_results in by_file.values() for result in file_results),
            args.output_file,
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n=== Parsing Complete ===")
    print(f"Files processed: {len(by_file)}")
    print(f"Hands parsed: {stats['ok']}")
    print(f"Failures: {stats['errors']}")
    print(f"Output: {stats['output_file']}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
