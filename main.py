#!/usr/bin/env python3
"""
OCR Layout - Main Entry Point.

Command-line shell around the batch orchestrator. Recognizes one image
or a directory of images and writes the reconstructed text, one block
per image separated by a blank line.

Usage:
    Command Line:
        python main.py --input scan.png
        python main.py --input ./scans/ --output results.txt --mode table
        python main.py --input ./scans/ --engine easyocr --engine tesseract

    Python:
        from main import run_recognition
        result = run_recognition("scans/", mode="auto")
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import ConfigurationManager, get_config
from ocr_layout.utils.logger import setup_logger_from_config, get_logger
from ocr_layout.utils.helpers import collect_image_files, ensure_directory
from ocr_layout.utils.exceptions import OCRLayoutError

DEFAULT_EXTENSIONS = [".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff"]


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Rebuild text and tables from OCR output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Recognize a single image:
        python main.py --input scan.png

    Force table output for a directory:
        python main.py --input ./scans/ --mode table --output tables.txt
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input image or directory of images"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output text file (default: stdout)"
    )

    parser.add_argument(
        "--mode", "-m",
        choices=["auto", "text", "table"],
        default=None,
        help="Recognition mode (default: layout.mode from configuration)"
    )

    parser.add_argument(
        "--engine", "-e",
        action="append",
        default=None,
        help="Recognition backend, repeat to rank fallbacks"
    )

    parser.add_argument(
        "--lang", "-l",
        type=str,
        default=None,
        help="Fixed language profile, e.g. chi_tra+eng (disables auto-detection)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """Load configuration and set up logging."""
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)
    elif args.quiet:
        logger.setLevel(logging.ERROR)

    logger.info(f"OCR layout {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    return config


def run_recognition(
    input_path: str,
    mode: Optional[str] = None,
    engines: Optional[List[str]] = None,
    language: Optional[str] = None,
    progress_callback=None
):
    """
    Run recognition over an image or a directory of images.

    Args:
        input_path: Image file or directory.
        mode: auto, text or table.
        engines: Ranked backend names.
        language: Fixed language profile.
        progress_callback: Called with (percent, message).

    Returns:
        BatchResult for the collected images.
    """
    from ocr_layout.batch import RecognitionOrchestrator

    logger = get_logger(__name__)

    files = collect_image_files(
        input_path, get_config("input.supported_extensions", DEFAULT_EXTENSIONS)
    )
    if not files:
        logger.warning(f"No supported images found in: {input_path}")
    else:
        logger.info(f"Found {len(files)} images to process")

    orchestrator = RecognitionOrchestrator(
        backends=engines,
        mode=mode,
        language=language,
        progress_callback=progress_callback
    )
    return orchestrator.run(files)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        def log_progress(percent: float, message: str) -> None:
            logger.info(f"[{percent:5.1f}%] {message}")

        result = run_recognition(
            input_path=args.input,
            mode=args.mode,
            engines=args.engine,
            language=args.lang,
            progress_callback=log_progress
        )

        if args.output:
            output_path = Path(args.output)
            ensure_directory(output_path.parent)
            output_path.write_text(result.text + "\n", encoding="utf-8")
            logger.info(f"Output written to: {output_path}")
        else:
            sys.stdout.write(result.text + "\n")

        logger.info(
            f"Recognition complete: {len(result.outcomes)} images, "
            f"{result.failed_count} failed"
        )
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except (OCRLayoutError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
