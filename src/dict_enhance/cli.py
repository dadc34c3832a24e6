"""Command line interface for merging glossaries into a Kobo dictionary."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import find_dotenv, load_dotenv

from .common.config import (
    SOURCE_TYPES,
    EnhanceSettings,
    default_dictionary_paths,
    load_settings,
    resolve_dictionaries,
)
from .common.errors import EnhanceError
from .common.fileio import atomic_write_text
from .corpus.engine import CorpusEngine
from .corpus.store import CorpusStore
from .glossary.stack import GlossaryStack

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _emit_error(message: str) -> None:
    print(f"error: {message}", file=sys.stderr)


def _add_dictionary_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags shared by every subcommand that loads glossaries."""
    parser.add_argument(
        "--dict",
        dest="dicts",
        action="append",
        choices=list(SOURCE_TYPES),
        help=(
            "Glossary to use; may be repeated, order sets priority. "
            "Defaults to every glossary found."
        ),
    )
    parser.add_argument("--edict", type=Path, help="Location of the edict2 file.")
    parser.add_argument(
        "--japanese3", type=Path, help="Location of the Japanese3 export."
    )
    parser.add_argument(
        "--merge-all",
        action="store_true",
        default=None,
        help="Merge the glosses of all glossaries instead of the first match.",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--quiet", action="store_true", help="Hide progress bars and info logging."
    )


def _add_corpus_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        required=True,
        help="Directory holding the unpacked dictionary html files.",
    )
    parser.add_argument(
        "--uncompressed",
        action="store_true",
        help="The html files are already un-gzipped (output is written the same way).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dict-enhance",
        description=(
            "Add English definitions from edict2 and/or Japanese3 to an unpacked "
            "Kobo Japanese dictionary."
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge_parser = subparsers.add_parser(
        "merge", help="Merge glossary definitions into every dictionary file."
    )
    _add_dictionary_arguments(merge_parser)
    _add_corpus_arguments(merge_parser)
    merge_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        required=True,
        help="Directory receiving the updated dictionary files.",
    )
    merge_parser.add_argument(
        "--workers",
        type=int,
        help="Number of dictionary files processed concurrently (default: 1).",
    )
    merge_parser.add_argument(
        "--stats-json", type=Path, help="Write run statistics as JSON to this path."
    )
    merge_parser.set_defaults(handler=_run_merge)

    info_parser = subparsers.add_parser(
        "info", help="Print what every glossary holds for a word and exit."
    )
    info_parser.add_argument("word", help="Headword to look up.")
    _add_dictionary_arguments(info_parser)
    info_parser.set_defaults(handler=_run_info)

    check_parser = subparsers.add_parser(
        "check", help="Show how the entries of one headword would be resolved."
    )
    check_parser.add_argument("word", help="Entry headword (the anchor name).")
    _add_dictionary_arguments(check_parser)
    _add_corpus_arguments(check_parser)
    check_parser.set_defaults(handler=_run_check)

    return parser


def build_settings(args: argparse.Namespace) -> EnhanceSettings:
    """Combine the optional settings file with command line overrides.

    Glossary paths come from ``--edict``/``--japanese3``, then the
    ``DICT_ENHANCE_*`` environment (``.env`` is honoured), then the defaults.
    The path flags also override the matching entries of the settings file.
    """
    settings = load_settings(args.config) if args.config else EnhanceSettings()
    updates: dict[str, object] = {}

    paths = default_dictionary_paths()
    overrides: dict[str, Path] = {}
    if args.edict:
        overrides["edict2"] = args.edict
    if args.japanese3:
        overrides["japanese3"] = args.japanese3
    paths.update(overrides)

    if args.dicts or not settings.dictionaries:
        updates["dictionaries"] = resolve_dictionaries(args.dicts, paths)
    elif overrides:
        updates["dictionaries"] = [
            spec.model_copy(update={"path": overrides[spec.source]})
            if spec.source in overrides
            else spec
            for spec in settings.dictionaries
        ]
    if args.merge_all is not None:
        updates["merge_all"] = args.merge_all
    if getattr(args, "workers", None) is not None:
        updates["workers"] = max(1, args.workers)
    if getattr(args, "uncompressed", False):
        updates["compressed"] = False

    if updates:
        settings = settings.model_copy(update=updates)
    return settings


def _load_stack(settings: EnhanceSettings) -> GlossaryStack:
    logger.info(
        "Using the following dictionaries as source for translations: %s",
        " ".join(spec.source for spec in settings.dictionaries),
    )
    return GlossaryStack.from_config(settings.dictionaries, merge_all=settings.merge_all)


def _run_merge(args: argparse.Namespace) -> int:
    settings = build_settings(args)
    stack = _load_stack(settings)
    store = CorpusStore(args.input, compressed=settings.compressed)
    engine = CorpusEngine(stack, workers=settings.workers, progress=not args.quiet)

    written = 0
    for blob in engine.run(store.blobs()):
        store.write(args.output, blob)
        written += 1
    store.copy_companions(args.output)
    logger.info("Wrote %d dictionary files to %s", written, args.output)

    print(engine.stats.summary(stack.source_ids))
    if args.stats_json:
        payload = engine.stats.as_dict()
        payload["usage"] = stack.usage()
        atomic_write_text(
            args.stats_json, json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        )
    return 0


def _run_info(args: argparse.Namespace) -> int:
    stack = _load_stack(build_settings(args))
    hits = stack.lookup_all(args.word)
    print(f"Info on {args.word}:")
    if not hits:
        print("No entry found.")
        return 1
    for source_id, gloss in hits:
        print(f"{source_id} entry found: {gloss}")
    return 0


def _run_check(args: argparse.Namespace) -> int:
    settings = build_settings(args)
    stack = _load_stack(settings)
    store = CorpusStore(args.input, compressed=settings.compressed)
    engine = CorpusEngine(stack)

    traces = engine.check_headword(store.blobs(), args.word)
    if not traces:
        print(f"No entry named {args.word} found.")
        return 1
    for trace in traces:
        entry = trace.entry
        variants = "／".join(entry.kanji_variants) or "-"
        if not entry.well_formed:
            outcome = "unparsable, passed through"
        elif trace.result:
            outcome = (
                f"{trace.result.key} -> {trace.result.gloss} "
                f"({', '.join(trace.result.sources)})"
            )
        else:
            outcome = "no match"
        print(f"[{trace.bucket}] {entry.headword} 【{variants}】: {outcome}")
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    args_list: List[str] = list(argv) if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(args_list)
    _configure_logging(args.verbose, args.quiet)
    load_dotenv(find_dotenv(usecwd=True))

    try:
        return args.handler(args)
    except EnhanceError as exc:
        _emit_error(str(exc))
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
