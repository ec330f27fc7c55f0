"""
vos - Speech-to-Text

Main application entry point.
Wires the hotkey, recorder, transcription client and clipboard into the
pipeline controller, and manages the stored API key from the command line.
"""

import argparse
import logging
import signal
import sys
import time
from typing import List, Optional

from vos.audio_recorder import AudioRecorder
from vos.config import Config
from vos.credential_store import CredentialStore, preview
from vos.exceptions import (
    CredentialError,
    EmptyCredentialError,
    HotkeyDetectorError,
    StorageError,
)
from vos.hotkey_detector import HotkeyDetector
from vos.output_handler import OutputHandler
from vos.pipeline import PipelineController, PipelineState
from vos.settings_store import JsonSettingsStore
from vos.status import ConsoleStatus
from vos.transcriber import TranscriptionClient
from vos.upload_encoder import UploadEncoder, validate_credential_format


logger = logging.getLogger(__name__)


class VosApp:
    """Main application class coordinating all modules."""

    def __init__(self, config: Config, credentials: CredentialStore):
        """
        Initialize all components.

        Args:
            config: Application configuration loaded from environment.
            credentials: API key store shared with the pipeline.
        """
        self.config = config
        self.credentials = credentials

        self.recorder = AudioRecorder(sample_rate=config.sample_rate)
        logger.debug(f"Audio recorder initialized (sample_rate={config.sample_rate})")

        self.encoder = UploadEncoder(url=config.api_url, model=config.model)
        self.client = TranscriptionClient(timeout=config.request_timeout)
        logger.debug(f"Transcription client initialized (model={config.model}, url={config.api_url})")

        self.output = OutputHandler()
        self.status = ConsoleStatus()

        self.pipeline = PipelineController(
            credentials=credentials,
            recorder=self.recorder,
            encoder=self.encoder,
            client=self.client,
            output=self.output,
            status=self.status,
            error_display_seconds=config.error_display_seconds,
            success_display_seconds=config.success_display_seconds,
            missing_key_display_seconds=config.missing_key_display_seconds,
        )

        self.detector = HotkeyDetector(config.hotkey, on_trigger=self.pipeline.handle_trigger)
        logger.info(f"Hotkey detector initialized: {self.detector.get_hotkey_description()}")

        self._running = False

    @property
    def state(self) -> PipelineState:
        """Current pipeline state."""
        return self.pipeline.state

    @property
    def is_running(self) -> bool:
        """Whether the application is running."""
        return self._running

    def run(self) -> None:
        """Start the hotkey listener and block until stopped."""
        self._running = True
        self.detector.start()
        self._print_banner()

        if not self.credentials.has_credential():
            logger.warning("No API key configured")
            print("[Warning] No API key configured. Add one with:")
            print("          python main.py --set-key sk-...")
            print()

        while self._running:
            time.sleep(0.1)

    def _print_banner(self) -> None:
        """Print welcome message and instructions."""
        hotkey = self.detector.get_hotkey_description()

        print("=" * 55)
        print("  vos - Speech-to-Text")
        print("=" * 55)
        print()
        print(f"  Transcription: {self.config.model}")
        print(f"  Hotkey: {hotkey} (press to start, press again to stop)")
        print()
        print("  The transcribed text will be copied to the clipboard.")
        print("  Press Ctrl+C to exit")
        print("=" * 55)
        print()

    def stop(self) -> None:
        """Stop the application gracefully."""
        if not self._running:
            return

        self._running = False
        self.detector.stop()
        self.pipeline.shutdown()

        print("\nvos stopped. Goodbye!")


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        debug: If True, enable debug-level logging
    """
    level = logging.DEBUG if debug else logging.INFO
    format_str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=format_str,
        datefmt=date_format
    )

    # Also log to file if in debug mode
    if debug:
        file_handler = logging.FileHandler("vos.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(format_str, datefmt=date_format))
        logging.getLogger().addHandler(file_handler)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="vos - Speech-to-Text")
    key_group = parser.add_mutually_exclusive_group()
    key_group.add_argument(
        "--set-key",
        metavar="KEY",
        help="Save the OpenAI API key and exit",
    )
    key_group.add_argument(
        "--delete-key",
        action="store_true",
        help="Delete the stored API key and exit",
    )
    key_group.add_argument(
        "--status",
        action="store_true",
        help="Show whether an API key is configured and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (also VOS_DEBUG=true)",
    )
    return parser.parse_args(argv)


def manage_key(args: argparse.Namespace, credentials: CredentialStore) -> int:
    """Handle the key management flags. Returns the process exit code."""
    if args.set_key is not None:
        trimmed = args.set_key.strip()
        try:
            if not trimmed:
                raise EmptyCredentialError()
            validate_credential_format(trimmed)
            credentials.save(trimmed)
        except (CredentialError, StorageError) as e:
            print(f"Error: {e}")
            return 1
        print(f"API key saved successfully (length: {len(trimmed)})")
        return 0

    if args.delete_key:
        try:
            credentials.delete()
        except StorageError as e:
            print(f"Error: {e}")
            return 1
        print("API key deleted")
        return 0

    credential = credentials.get()
    if credential is None:
        print("No API key configured")
        return 1
    print(f"API key configured: {preview(credential)} (length: {len(credential)})")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Load and validate configuration
    try:
        config = Config.from_env()
        setup_logging(debug=args.debug or config.debug)
        warnings = config.validate()
        for warning in warnings:
            print(f"Warning: {warning}")
            logger.warning(warning)
    except ValueError as e:
        setup_logging()
        print(f"Error: {e}")
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    credentials = CredentialStore(JsonSettingsStore(config.settings_path))

    if args.set_key is not None or args.delete_key or args.status:
        sys.exit(manage_key(args, credentials))

    logger.info("vos starting...")

    try:
        app = VosApp(config=config, credentials=credentials)
    except HotkeyDetectorError as e:
        print(f"Error: {e}")
        logger.error(f"Hotkey detector error: {e}")
        sys.exit(1)

    # Set up signal handlers for graceful shutdown
    def signal_handler(sig, frame):
        logger.info("Received shutdown signal")
        app.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        logger.info("vos running")
        app.run()
    except HotkeyDetectorError as e:
        print(f"Error: {e}")
        logger.error(f"Hotkey detector error: {e}")
        app.stop()
        sys.exit(1)
    except Exception as e:
        print(f"Fatal error: {e}")
        logger.exception(f"Fatal error during execution: {e}")
        app.stop()
        sys.exit(1)


if __name__ == "__main__":
    main()
