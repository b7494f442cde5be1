"""
Command-line interface for the silence splitter
"""
import argparse
import logging
import os
from typing import Callable, List, Tuple

from .config import Config, find_default_config
from .core import (
    AnalysisSession,
    DetectionParameters,
    OutputNamer,
    SegmentExtractor,
    SegmentStatus,
    format_seconds,
)
from .core.selections import (
    parse_min_silence,
    parse_noise_threshold,
    parse_process_type,
    parse_review_choice,
    parse_yes_no,
)
from .errors import AnalysisError, ConfigError, FatalExtractionError, ParseError
from .services.ffmpeg import FfmpegSegmentSplitter, FfmpegSilenceAnalyzer, PydubSegmentSplitter
from .services.media_files import create_output_dir, find_audio_files

logger = logging.getLogger(__name__)

RULE = "=" * 60

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def ask(prompt: str, parser: Callable[[str], object]):
    """Prompt until ``parser`` accepts the answer; its ValueError is shown."""
    while True:
        answer = input(prompt)
        try:
            return parser(answer)
        except ValueError as e:
            print(f"Error: {e}")


def _existing_file(value: str) -> str:
    path = value.strip().strip('"')
    if not os.path.isfile(path):
        raise ValueError("File not found or is not a valid file. Please try again.")
    return path


def _existing_dir(value: str) -> str:
    path = value.strip().strip('"')
    if not os.path.isdir(path):
        raise ValueError("Folder not found or is not a valid directory. Please try again.")
    return path


def build_analyzer(config: Config) -> FfmpegSilenceAnalyzer:
    return FfmpegSilenceAnalyzer(
        ffmpeg=config.get('ffmpeg.binary'),
        timeout=config.get('ffmpeg.timeout'),
    )


def build_splitter(config: Config):
    mode = config.get('ffmpeg.split_mode', 'copy')
    if mode == 'reencode':
        return PydubSegmentSplitter()
    if mode != 'copy':
        logger.warning("Unknown split mode %r, using stream copy", mode)
    return FfmpegSegmentSplitter(
        ffmpeg=config.get('ffmpeg.binary'),
        timeout=config.get('ffmpeg.timeout'),
    )


def collect_inputs(config: Config) -> Tuple[str, List[str]]:
    """Return ``('s' | 'f', paths)`` from the config or interactive prompts."""
    extensions = config.get('audio_extensions')
    given = config.get('input')
    if given:
        if os.path.isdir(given):
            return 'f', find_audio_files(given, extensions)
        if os.path.isfile(given):
            return 's', [given]
        raise ValueError(f"Input not found: {given}")

    process_type = ask("Do you want to process a (s)ingle file or a (f)older of files? (s/f): ",
                       parse_process_type)
    if process_type == 's':
        path = ask("Enter the path to the audio file (e.g., audio.mp3): ", _existing_file)
        return 's', [path]

    folder = ask("Enter the path to the folder containing audio files: ", _existing_dir)
    print(f"Status: Scanning folder '{folder}' for audio files...")
    return 'f', find_audio_files(folder, extensions)


def resolve_output_dir(config: Config) -> str:
    """Return a usable output directory, offering to create it when missing."""
    candidate = config.get('output_dir')
    while True:
        if not candidate:
            candidate = input("Enter the base output directory (e.g., output_splits): ").strip().strip('"')
            if not candidate:
                continue
        if os.path.isdir(candidate):
            return candidate
        if os.path.exists(candidate):
            print("Error: The provided path is not a directory. Please enter a valid directory path.")
            candidate = None
            continue
        if config.get('assume_yes') or ask(
                f"Output directory '{candidate}' does not exist. Create it? (y/n): ", parse_yes_no):
            try:
                return create_output_dir(candidate)
            except OSError as e:
                print(f"Failed to create directory '{candidate}': {e}")
        else:
            print("Cannot proceed without a valid output directory.")
        candidate = None


def resolve_parameters(config: Config, force_prompt: bool = False) -> DetectionParameters:
    """Detection parameters from the config, prompting for what is missing."""
    min_silence = None
    noise_db = None
    if not force_prompt:
        try:
            if config.get('min_silence') is not None:
                min_silence = parse_min_silence(str(config.get('min_silence')))
            if config.get('noise_db') is not None:
                noise_db = parse_noise_threshold(str(config.get('noise_db')))
        except ValueError as e:
            print(f"Error: {e}")

    if min_silence is None:
        suggested = config.get('suggested_min_silence')
        min_silence = ask(
            f"Enter the minimum silence length in seconds (e.g., {suggested}): ",
            parse_min_silence,
        )
    if noise_db is None:
        suggested = config.get('suggested_noise_db')
        noise_db = ask(
            f"Enter the noise threshold in dB (e.g., {suggested}). Suggestion: {suggested}dB. "
            "Less negative values detect more silence: ",
            parse_noise_threshold,
        )
    return DetectionParameters(min_silence_duration=min_silence, noise_threshold_db=noise_db)


def describe_result(path: str, result, previous=None) -> None:
    print(f"Status: Identified {result.segment_count} audio segment(s) for '{path}' "
          f"({len(result.intervals)} silence interval(s)).")
    if result.segment_count == 1:
        print("No silences found with these settings: the file would not be split.")
    if previous is not None:
        print(f"        Previous run (min silence {previous.parameters.min_silence_duration:g}s, "
              f"noise {previous.parameters.noise_threshold_db:g}dB) found {previous.segment_count}.")


def review_single_file(session: AnalysisSession, params: DetectionParameters, config: Config):
    """Analyze until the user proceeds; returns the committed analysis or None."""
    while True:
        print(f"\nStatus: Detecting silences in '{session.media_path}' with threshold "
              f"{params.min_silence_duration:.2f}s and noise {params.noise_threshold_db:g}dB...")
        print("(This might take a while for long audio files)")
        try:
            result = session.analyze(params)
        except (AnalysisError, ParseError) as e:
            print(f"An error occurred during detection: {e}")
            if config.get('assume_yes') or not ask(
                    "Do you want to re-analyze this file with different settings? (y/n): ", parse_yes_no):
                print(f"Skipping splitting for '{session.media_path}' due to detection error.")
                return None
            params = resolve_parameters(config, force_prompt=True)
            continue

        describe_result(session.media_path, result, session.previous())
        if config.get('assume_yes'):
            return session.commit()
        choice = ask("Do you want to (r)e-analyze this file with different settings "
                     "or (p)roceed to split? (r/p): ", parse_review_choice)
        if choice == 'p':
            return session.commit()
        params = resolve_parameters(config, force_prompt=True)


def print_progress(event) -> None:
    if event.status is SegmentStatus.SUCCEEDED:
        print(f"  [{event.index}/{event.total}] ✓ {event.destination}")
    else:
        print(f"  [{event.index}/{event.total}] ✗ {event.destination}: {event.reason}")


def split_committed(committed, output_dir: str, splitter, config: Config) -> bool:
    """Extract every segment of ``committed``; returns True if all succeeded."""
    path = committed.media_path
    if committed.segment_count == 1:
        print(f"  No silences detected longer than the specified threshold for '{path}'. "
              "Skipping splitting for this file.")
        return True

    segments = committed.segments()
    namer = OutputNamer.for_source(path, output_dir, config.get('continue_numbering', True))
    print(f"  Status: Splitting '{path}' into {len(segments)} parts, "
          f"starting from index {namer.start_index}.")
    for segment in segments:
        end = format_seconds(segment.end) if segment.end is not None else "end of file"
        print(f"    Part {segment.index}: {format_seconds(segment.start)} -> {end}")

    extractor = SegmentExtractor(splitter, path, on_progress=print_progress)
    try:
        report = extractor.run(segments, namer)
    except FatalExtractionError as e:
        print(f"  Error: {e}")
        return False

    if report.ok:
        print(f"  Successfully split '{path}' into {len(report.succeeded)} files.")
    else:
        failed = ', '.join(str(index) for index, _ in report.failed)
        print(f"  Finished with errors: {len(report.succeeded)} succeeded, "
              f"{len(report.failed)} failed (parts {failed}).")
    return report.ok


def process_batch(paths: List[str], output_dir: str, params: DetectionParameters, config: Config) -> bool:
    analyzer = build_analyzer(config)
    splitter = build_splitter(config)
    all_ok = True
    for path in paths:
        print(f"\n--- Processing: {path} ---")
        session = AnalysisSession(analyzer, path, min_gap=config.get('min_segment', 0.0))
        try:
            result = session.analyze(params)
        except (AnalysisError, ParseError) as e:
            print(f"An error occurred during processing {path}: {e}")
            all_ok = False
            continue
        describe_result(path, result)
        all_ok = split_committed(session.commit(), output_dir, splitter, config) and all_ok
    return all_ok


def run_once(config: Config) -> bool:
    try:
        process_type, paths = collect_inputs(config)
    except ValueError as e:
        print(f"Error: {e}")
        return False
    if not paths:
        print("No supported audio files found in the specified folder.")
        return False
    if process_type == 'f':
        print(f"Status: Found {len(paths)} audio files in the folder.")

    output_dir = resolve_output_dir(config)
    params = resolve_parameters(config)

    if process_type == 'f':
        return process_batch(paths, output_dir, params, config)

    session = AnalysisSession(build_analyzer(config), paths[0],
                              min_gap=config.get('min_segment', 0.0))
    committed = review_single_file(session, params, config)
    if committed is None:
        print("Skipping audio splitting for the current file.")
        return False
    print(f"\n--- Processing: {paths[0]} ---")
    return split_committed(committed, output_dir, build_splitter(config), config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Split audio files at silences using FFmpeg')
    parser.add_argument('--config', type=str, help='Path to the YAML configuration file')
    parser.add_argument('-i', '--input', type=str, help='Audio file or folder of audio files to split')
    parser.add_argument('-o', '--output-dir', type=str, help='Base output directory for the split files')
    parser.add_argument('-s', '--min-silence', type=str,
                        help='Minimum silence length, in seconds or HH:MM:SS (e.g., 2.0)')
    parser.add_argument('-n', '--noise-db', type=str, help='Noise threshold in dB (e.g., -40)')
    parser.add_argument('--split-mode', choices=['copy', 'reencode'],
                        help="'copy' cuts without re-encoding, 'reencode' decodes and re-exports")
    parser.add_argument('-y', '--yes', dest='assume_yes', action='store_true', default=None,
                        help='Do not ask for confirmation: split with the first analysis')
    parser.add_argument('--restart-numbering', dest='continue_numbering', action='store_false', default=None,
                        help='Always number output files from 001 instead of continuing after existing ones')
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS,
                        help='Logging level (DEBUG, INFO, WARNING, ERROR)')
    return parser


def main(argv=None):
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = Config(config_file=args.config or find_default_config())
    except ConfigError as e:
        print(e)
        return 2

    config.update_from_args({
        'input': args.input,
        'output_dir': args.output_dir,
        'min_silence': args.min_silence,
        'noise_db': args.noise_db,
        'assume_yes': args.assume_yes,
        'continue_numbering': args.continue_numbering,
        'log_level': args.log_level,
        'ffmpeg.split_mode': args.split_mode,
    })
    log_level = str(config.get('log_level') or 'INFO').upper()
    if log_level not in LOG_LEVELS:
        print(f"Error in configuration: log_level must be one of {', '.join(LOG_LEVELS)} (got {log_level!r})")
        return 2
    logging.basicConfig(level=log_level,
                        format='%(levelname)s %(name)s: %(message)s')

    print("Welcome to the Silence Splitter!")
    print(RULE)
    print("Note: FFmpeg and FFprobe must be installed and on your PATH.")
    print(RULE)

    interactive = not config.get('input')
    all_ok = True
    try:
        while True:
            all_ok = run_once(config) and all_ok
            if not interactive:
                break
            if not ask("\nDo you want to process another file or folder? (y/n): ", parse_yes_no):
                break
    except (KeyboardInterrupt, EOFError):
        print("\nOperation cancelled.")
        return 1

    print("\nThank you for using the Silence Splitter! Goodbye.")
    return 0 if all_ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
