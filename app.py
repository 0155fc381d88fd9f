#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
LingoPanel - English text translation in the browser

Entry point for the NiceGUI-based translation application.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))


def setup_logging():
    """Configure logging to console and file for debugging.

    Log file location: ~/.lingopanel/logs/app.log
    - Cleared on first startup, then append mode (NiceGUI reload spawns a child process)

    Returns:
        tuple: (console_handler, file_handler) to keep references alive
    """
    logs_dir = Path.home() / ".lingopanel" / "logs"
    log_file_path = logs_dir / "app.log"

    # Create console handler first (always works)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    ))

    # Try to create log directory
    file_handler = None
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        # Fall back to console-only logging if log directory cannot be created
        print(f"[WARNING] Failed to create log directory {logs_dir}: {e}", file=sys.stderr)
        logs_dir = None

    # Try to create file handler
    if logs_dir is not None:
        try:
            # Clear log file only in the first process
            if not os.environ.get('LINGOPANEL_LOG_INITIALIZED'):
                os.environ['LINGOPANEL_LOG_INITIALIZED'] = '1'
                log_file_path.write_bytes(b'')

            # Use append mode for multiprocess compatibility
            file_handler = logging.FileHandler(
                log_file_path,
                mode='a',
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
        except OSError as e:
            print(f"[WARNING] Failed to create log file {log_file_path}: {e}", file=sys.stderr)
            file_handler = None

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Remove existing handlers that might interfere
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)
    if file_handler:
        root_logger.addHandler(file_handler)

    # Suppress verbose logging from third-party libraries
    # uvicorn/starlette: Internal web server logs
    # httpx/httpcore/google_genai: one line per API request
    for name in ['uvicorn', 'uvicorn.error', 'uvicorn.access',
                 'starlette', 'httpcore', 'httpx',
                 'google_genai', 'google_genai.models',
                 'asyncio', 'concurrent']:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Log startup message
    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("LingoPanel starting...")
    logger.info("=" * 60)
    logger.info("Executable: %s", sys.executable)
    logger.info("CWD: %s", Path.cwd())
    logger.debug("sys.argv: %s", sys.argv)

    # Log file location information
    if file_handler:
        logger.info("Log file: %s", log_file_path)
    else:
        logger.warning("File logging disabled - console only")

    return (console_handler, file_handler)  # Return both handlers to keep references


# Global reference to keep log handlers alive (prevents garbage collection)
# Tuple of (console_handler, file_handler)
_global_log_handlers = None


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the LingoPanel web UI.")
    parser.add_argument("--host", default=None, help="Host to bind to (default: from settings)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (default: from settings)")
    parser.add_argument("--no-show", action="store_true", help="Do not open a browser window")
    return parser.parse_args(argv)


def main():
    global _global_log_handlers
    _global_log_handlers = setup_logging()  # Keep reference to prevent garbage collection

    logger = logging.getLogger(__name__)
    args = _parse_args()

    from lingopanel.ui.app import run_app

    try:
        run_app(
            host=args.host,
            port=args.port,
            show=not args.no_show,
        )
    except KeyboardInterrupt:
        # Normal shutdown via Ctrl+C
        logger.debug("Application shutdown via KeyboardInterrupt")
    except asyncio.CancelledError:
        # Async task cancellation during shutdown is expected
        logger.debug("Application shutdown via CancelledError")
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        raise


if __name__ == '__main__':
    main()
