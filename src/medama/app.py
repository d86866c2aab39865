"""
Main application controller for the directory organizer.
Collects files, organizes them and prints or exports the plan.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional, List, TextIO

from .errors import ConfigurationError, EmptyInputError, MedamaError
from .file_access.local_accessor import FileSystemAccessor
from .logging_config import setup_logging
from .models import FileRecord, Strategy
from .session import OrganizerSession
from .utils.config_manager import ConfigManager
from .utils.error_handler import ErrorHandler
from .utils.report_generator import PlanExporter, plan_filename

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOTHING_TO_ORGANIZE = 1
EXIT_FAILURE = 2
EXIT_INTERRUPTED = 130


class MedamaApp:
    """Application controller that drives one organizing session."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        cli_args: Optional[argparse.Namespace] = None,
        stdout: Optional[TextIO] = None,
    ):
        """Initialize the application with configuration.

        Args:
            config_file: Path to configuration file
            cli_args: Parsed command line arguments overriding configuration
            stdout: Stream for user-facing output
        """
        self.config_file = config_file
        self.cli_args = cli_args
        self.stdout = stdout or sys.stdout
        self.config_manager = None
        self.session = None
        self.error_handler = ErrorHandler()
        self._is_initialized = False

    def initialize(self):
        """Load configuration, set up logging and create the session."""
        if self._is_initialized:
            return

        self.config_manager = ConfigManager(
            config_file=Path(self.config_file) if self.config_file else None,
            cli_args=self.cli_args,
        )
        self._setup_logging()

        exporter = PlanExporter(
            decorated=self.config_manager.get("export.decorated", False),
            encoding=self.config_manager.get("export.encoding", "utf-8"),
        )
        self.session = OrganizerSession(
            strategy=self.config_manager.strategy, exporter=exporter
        )

        self._is_initialized = True
        logger.debug("Application initialized successfully")

    def _setup_logging(self):
        """Configure logging based on application settings."""
        log_file = self.config_manager.get("logging.file")
        try:
            setup_logging(
                log_level=self.config_manager.get("logging.level"),
                log_file=log_file,
                fmt=self.config_manager.get("logging.format"),
            )
        except OSError as e:
            raise ConfigurationError(f"Cannot open log file {log_file}: {e}") from e

    def collect_files(
        self, paths: Optional[List[str]] = None, directories: Optional[List[str]] = None
    ) -> List[FileRecord]:
        """Build file records from explicit paths and scanned directories."""
        records = []

        if paths:
            records.extend(FileSystemAccessor().records_from_paths(paths))

        for directory in directories or []:
            accessor = FileSystemAccessor(directory)
            records.extend(
                accessor.scan_directory(
                    recursive=self.config_manager.get("organization.recursive", True),
                    include_hidden=self.config_manager.get(
                        "organization.include_hidden", False
                    ),
                )
            )

        return records

    def run(
        self,
        paths: Optional[List[str]] = None,
        directories: Optional[List[str]] = None,
        export_path: Optional[str] = None,
        list_files: bool = False,
        error_report: Optional[str] = None,
    ) -> int:
        """Run the organize workflow.

        Args:
            paths: Files selected by the user
            directories: Directories whose files are added to the selection
            export_path: Where to write the plan, if anywhere. An empty
                string selects the configured file name
            list_files: Print the selected files before organizing
            error_report: Save a JSON error report here if anything failed

        Returns:
            Process exit code
        """
        try:
            self.initialize()

            self.session.select_files(self.collect_files(paths, directories))

            if list_files:
                self._print_selected()

            result = self.session.organize()
            output_format = self.config_manager.get("export.format", "text")

            self._write(result.summary_line())
            self._write("")
            self._write(self.session.render_plan(output_format), end="")

            if export_path is not None:
                target = export_path or plan_filename(
                    self.config_manager.get("export.filename"), output_format
                )
                written = self.session.export_plan(target, output_format)
                self._write(f"Organization plan exported to {written}")

            return EXIT_OK

        except EmptyInputError as e:
            record = self.error_handler.handle_error(e, "organize")
            self._write(self.error_handler.user_message(record), stream=sys.stderr)
            return EXIT_NOTHING_TO_ORGANIZE

        except (MedamaError, ValueError) as e:
            self._report_failure(e, "run")
            return EXIT_FAILURE

        finally:
            if error_report:
                self._save_error_report(error_report)

    def write_config(self, output_path: str) -> int:
        """Write the effective configuration as a template file.

        The format follows the file suffix: YAML for '.yaml'/'.yml',
        commented JSON otherwise.
        """
        try:
            self.initialize()
            self.config_manager.create_template(Path(output_path))
        except MedamaError as e:
            self._report_failure(e, "write_config")
            return EXIT_FAILURE

        self._write(f"Configuration written to {output_path}")
        return EXIT_OK

    def _report_failure(self, error: Exception, context: str):
        record = self.error_handler.handle_error(error, context)
        self._write(
            f"Error: {self.error_handler.user_message(record)}", stream=sys.stderr
        )

    def _save_error_report(self, filepath: str):
        if not self.error_handler.error_history:
            return
        try:
            self.error_handler.save_error_report(Path(filepath))
        except OSError as e:
            logger.error(f"Could not save error report to {filepath}: {e}")
            self._write(
                f"Error: could not save error report to {filepath}", stream=sys.stderr
            )

    def _print_selected(self):
        rows = self.session.selected_rows()
        self._write(f"Selected files ({len(rows)}):")
        for name, size, modified in rows:
            self._write(f"  {name:40s} {size:>10s}  {modified}")
        self._write("")

    def _write(self, text: str, end: str = "\n", stream: Optional[TextIO] = None):
        print(text, end=end, file=stream or self.stdout)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="medama",
        description="Group files into categories and produce an organization plan",
    )

    parser.add_argument("paths", nargs="*", help="Files to organize")

    parser.add_argument(
        "--dir",
        dest="directories",
        action="append",
        default=[],
        help="Directory whose files are added to the selection (repeatable)",
    )

    parser.add_argument(
        "--recursive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include files in subdirectories of --dir",
    )

    parser.add_argument(
        "--include-hidden",
        action="store_true",
        default=None,
        help="Include dotfiles and dot-directories when scanning",
    )

    parser.add_argument(
        "--strategy",
        choices=[s.value for s in Strategy],
        default=None,
        help="Organization strategy",
    )

    parser.add_argument(
        "--export",
        dest="export_path",
        nargs="?",
        const="",
        default=None,
        help="Write the plan to this file (default name from configuration)",
    )

    parser.add_argument(
        "--format", choices=["text", "json"], default=None, help="Plan format"
    )

    parser.add_argument(
        "--decorated",
        action="store_true",
        default=None,
        help="Use folder and tree glyphs in the text plan",
    )

    parser.add_argument(
        "--list", dest="list_files", action="store_true", help="List selected files"
    )

    parser.add_argument("--config", help="Path to configuration file", default=None)

    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
        default=None,
    )

    parser.add_argument("--log-file", help="Also write logs to this file", default=None)

    parser.add_argument(
        "--write-config",
        metavar="PATH",
        default=None,
        help="Write the effective configuration to PATH (.json or .yaml) and exit",
    )

    parser.add_argument(
        "--error-report",
        metavar="PATH",
        default=None,
        help="Save a JSON report of any errors to PATH",
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point for the application."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose and args.log_level is None:
        args.log_level = "DEBUG"

    app = MedamaApp(config_file=args.config, cli_args=args)

    try:
        if args.write_config:
            code = app.write_config(args.write_config)
        else:
            code = app.run(
                paths=args.paths,
                directories=args.directories,
                export_path=args.export_path,
                list_files=args.list_files,
                error_report=args.error_report,
            )
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        code = EXIT_INTERRUPTED

    sys.exit(code)


if __name__ == "__main__":
    main()
